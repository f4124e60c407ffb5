"""CLI tools for admissions CRM administration."""

import click

from admissions.db.enums import Role
from admissions.db.session import SessionLocal
from admissions.services import report_service, user_service


@click.group()
def cli():
    """Admissions CRM CLI tools."""
    pass


@cli.command()
@click.option("--username", required=True, help="Login name")
@click.option("--password", required=True, help="Initial password (min 6 characters)")
@click.option("--display-name", required=True, help="Name shown in the UI")
@click.option("--email", required=True, help="Contact email")
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.ADVISOR.value,
    show_default=True,
)
def create_user(username: str, password: str, display_name: str, email: str, role: str):
    """
    Create a user account.

    This is the bootstrap command for the first director.

    Example:
        python -m admissions.cli create-user --username ana --password secret1 \\
            --display-name "Ana Ruiz" --email ana@school.mx --role director
    """
    if len(password) < 6:
        click.echo("❌ Password must be at least 6 characters")
        return

    db = SessionLocal()
    try:
        user = user_service.create_user(
            db,
            username=username,
            password=password,
            display_name=display_name,
            email=email,
            role=role,
        )
        db.commit()
        click.echo(f"✓ Created user: {user.username}")
        click.echo(f"  ID: {user.id}")
        click.echo(f"  Role: {user.role}")
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


@cli.command()
@click.option("--username", required=True, help="User to revoke sessions for")
def revoke_sessions(username: str):
    """
    Revoke all sessions for a user by bumping their token_version.

    Example:
        python -m admissions.cli revoke-sessions --username ana
    """
    db = SessionLocal()
    try:
        user = user_service.get_user_by_username(db, username)
        if not user:
            click.echo(f"❌ User not found: {username}")
            return

        old_version = user.token_version
        user_service.revoke_all_sessions(db, user.id)
        click.echo(f"✓ Revoked all sessions for {username}")
        click.echo(f"  Token version: {old_version} → {user.token_version}")
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


@cli.command()
def run_due_reports():
    """
    Execute scheduled report definitions that are due.

    Same work as POST /internal/scheduled/reports, for hosts that prefer
    invoking the CLI from cron.
    """
    db = SessionLocal()
    try:
        result = report_service.run_due_reports(db)
        db.commit()
        click.echo(f"✓ Executed: {result['executed']}  Failed: {result['failed']}")
        for path in result["file_paths"]:
            click.echo(f"  {path}")
    except Exception as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


if __name__ == "__main__":
    cli()
