#!/usr/bin/env python3
"""
Database migration runner for Supabase.

Connects directly to the Supabase PostgreSQL database and applies the SQL
files in migrations/ in name order, recording each one with a checksum.
The users table migration carries the UNIQUE constraints on email and
phone number that registration relies on.

Usage:
    uv run python run_migrations.py              # Run pending migrations
    uv run python run_migrations.py --status     # Show migration status
    uv run python run_migrations.py --dry-run    # Show what would run

Configuration:
    Set SUPABASE_DB_URL in your .env file (Supabase Dashboard → Settings →
    Database → Connection string → URI).
"""

import argparse
import hashlib
import sys
from dataclasses import dataclass
from pathlib import Path

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = "_migrations"


@dataclass(frozen=True)
class Migration:
    """A migration file on disk."""

    name: str
    path: Path
    checksum: str


def checksum_of(content: str) -> str:
    """Short content hash used to detect edited migrations."""
    return hashlib.sha256(content.encode()).hexdigest()[:16]


def discover_migrations(migrations_dir: Path = MIGRATIONS_DIR) -> list[Migration]:
    """List migration files in the order they must run."""
    if not migrations_dir.exists():
        return []
    return [
        Migration(name=path.name, path=path, checksum=checksum_of(path.read_text()))
        for path in sorted(migrations_dir.glob("*.sql"))
    ]


def pending_migrations(
    available: list[Migration],
    applied: dict[str, str],
) -> tuple[list[Migration], list[Migration]]:
    """
    Split available migrations into pending and changed-since-applied.

    Args:
        available: Migrations on disk
        applied: Applied migration name -> recorded checksum

    Returns:
        Tuple of (pending, changed)
    """
    pending = [m for m in available if m.name not in applied]
    changed = [m for m in available if m.name in applied and applied[m.name] != m.checksum]
    return pending, changed


def get_db_connection(db_url: str):
    """Get a connection to the Supabase PostgreSQL database."""
    if not db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        sys.exit(1)
    try:
        return psycopg2.connect(db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_migrations_table(conn) -> None:
    """Create the migrations tracking table if it doesn't exist."""
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                """
                CREATE TABLE IF NOT EXISTS {} (
                    id SERIAL PRIMARY KEY,
                    name VARCHAR(255) NOT NULL UNIQUE,
                    checksum VARCHAR(64) NOT NULL,
                    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                );
                """
            ).format(sql.Identifier(MIGRATIONS_TABLE))
        )
    conn.commit()


def get_applied_migrations(conn) -> dict[str, str]:
    """Get applied migration names and their recorded checksums."""
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum FROM {} ORDER BY name").format(
                sql.Identifier(MIGRATIONS_TABLE)
            )
        )
        return {row[0]: row[1] for row in cur.fetchall()}


def apply_migration(conn, migration: Migration) -> None:
    """Run one migration and record it, atomically."""
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(MIGRATIONS_TABLE)
                ),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error:
        conn.rollback()
        raise


def show_status(available: list[Migration], applied: dict[str, str]) -> None:
    """Print the status of all migrations."""
    if not available and not applied:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Checksum")

    pending, changed = pending_migrations(available, applied)
    pending_names = {m.name for m in pending}
    changed_names = {m.name for m in changed}
    for migration in available:
        if migration.name in pending_names:
            status = "[yellow]Pending[/yellow]"
        elif migration.name in changed_names:
            status = "[red]Changed[/red]"
        else:
            status = "[green]Applied[/green]"
        table.add_row(migration.name, status, migration.checksum)
    console.print(table)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Run database migrations for Supabase")
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show migration status without running anything",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what migrations would run without executing them",
    )
    args = parser.parse_args()

    console.print("[bold]Storefront Database Migrations[/bold]\n")

    conn = get_db_connection(get_settings().supabase_db_url)
    try:
        ensure_migrations_table(conn)
        available = discover_migrations()
        applied = get_applied_migrations(conn)

        if args.status:
            show_status(available, applied)
            return

        pending, changed = pending_migrations(available, applied)
        for migration in changed:
            console.print(f"[yellow]Warning:[/yellow] {migration.name} has changed since it was applied!")

        if not pending:
            console.print("[green]All migrations are up to date![/green]")
            return

        for migration in pending:
            if args.dry_run:
                console.print(f"[cyan]Would run:[/cyan] {migration.name}")
                continue
            console.print(f"[blue]Running:[/blue] {migration.name}...")
            try:
                apply_migration(conn, migration)
            except psycopg2.Error as e:
                console.print(f"[red]✗[/red] {migration.name} failed: {e}")
                sys.exit(1)
            console.print(f"[green]✓[/green] {migration.name} applied")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
