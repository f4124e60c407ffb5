"""Report delivery seam.

Generated report files are handed to a ReportSink together with the
definition's recipients. Delivery itself (email, storage upload) lives
outside this service; the default sink only logs.
"""

import logging
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)


class ReportSink(Protocol):
    def deliver(self, report_name: str, file_path: str, recipients: Sequence[str]) -> None:
        ...


class LoggingReportSink:
    """Records the hand-off without delivering anything."""

    def deliver(self, report_name: str, file_path: str, recipients: Sequence[str]) -> None:
        logger.info(
            "Report ready: name=%s path=%s recipients=%d",
            report_name,
            file_path,
            len(recipients),
        )

