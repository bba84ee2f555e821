"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
import os
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from freelanly.config import AppConfig, load_config
from freelanly.documents.assembly import DocumentAssemblyService
from freelanly.errors import FreelanlyError
from freelanly.export.pdf_exporter import export_to_file
from freelanly.logging.usage_store import UsageStore
from freelanly.models.business import ProjectStatus
from freelanly.models.documents import DocumentKind
from freelanly.models.session import UserSession
from freelanly.storage import BusinessStore, Database, ProfileStore, ResumeStore

app = typer.Typer(
    name="freelanly",
    help="Freelancer clients, projects, documents and resumes",
    no_args_is_help=True,
)
console = Console()


def _session() -> UserSession:
    user = os.environ.get("FREELANLY_USER", "local")
    return UserSession(user_id=user, display_name=os.environ.get("FREELANLY_NAME", ""))


def _stores(config: AppConfig) -> tuple[BusinessStore, ResumeStore]:
    db = Database(config.storage.resolved_db_path)
    return BusinessStore(db), ResumeStore(db)


def _fail(e: Exception) -> typer.Exit:
    console.print(f"[red]{e}[/red]")
    return typer.Exit(1)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    config = load_config()
    Database(config.storage.resolved_db_path)
    UsageStore(config.storage.resolved_usage_db_path)
    console.print(f"[green]Database ready: {config.storage.resolved_db_path}[/green]")


@app.command()
def clients() -> None:
    """List your clients."""
    business, _ = _stores(load_config())
    rows = business.list_clients(_session())
    if not rows:
        console.print("[yellow]No clients yet.[/yellow]")
        return
    table = Table(title="Clients")
    for col in ("ID", "Name", "Email", "Company", "Language"):
        table.add_column(col)
    for c in rows:
        table.add_row(str(c.id), c.name, c.email, c.company or "", c.language or "")
    console.print(table)


@app.command("add-client")
def add_client(
    name: str = typer.Argument(help="Client name"),
    email: str = typer.Option(..., "--email", help="Contact email"),
    company: str = typer.Option(None, "--company", help="Company name"),
    language: str = typer.Option(None, "--language", help="Preferred language"),
) -> None:
    """Add a client."""
    business, _ = _stores(load_config())
    try:
        client = business.create_client(
            _session(),
            {"name": name, "email": email, "company": company, "language": language},
        )
    except FreelanlyError as e:
        raise _fail(e)
    console.print(f"[green]Client #{client.id} added: {client.name}[/green]")


@app.command("edit-client")
def edit_client(
    client_id: int = typer.Argument(help="Client ID"),
    name: str = typer.Option(None, "--name"),
    email: str = typer.Option(None, "--email"),
    company: str = typer.Option(None, "--company"),
    language: str = typer.Option(None, "--language"),
) -> None:
    """Change a client's details; omitted options stay as they are."""
    changes = {
        k: v
        for k, v in {"name": name, "email": email, "company": company, "language": language}.items()
        if v is not None
    }
    business, _ = _stores(load_config())
    try:
        client = business.update_client(_session(), client_id, changes)
    except FreelanlyError as e:
        raise _fail(e)
    console.print(f"[green]Client #{client.id} updated: {client.name}[/green]")


@app.command()
def profile(
    name: str = typer.Option(None, "--name"),
    email: str = typer.Option(None, "--email"),
    phone: str = typer.Option(None, "--phone"),
    location: str = typer.Option(None, "--location"),
    website: str = typer.Option(None, "--website"),
    job_title: str = typer.Option(None, "--job-title"),
) -> None:
    """Show your profile, or update it when options are given."""
    session = _session()
    profiles = ProfileStore(Database(load_config().storage.resolved_db_path))
    current = profiles.get_profile(session)
    changes = {
        k: v
        for k, v in {
            "name": name,
            "email": email,
            "phone": phone,
            "location": location,
            "website": website,
            "job_title": job_title,
        }.items()
        if v is not None
    }
    if changes:
        base = current.model_dump() if current else {}
        try:
            current = profiles.save_profile(session, base | changes)
        except FreelanlyError as e:
            raise _fail(e)
        console.print("[green]Profile saved[/green]")
    if current is None:
        console.print("[yellow]No profile yet.[/yellow]")
        return
    console.print(
        Panel(
            "\n".join(f"{label}: {escape(value)}" for label, value in current.to_payload().items() if value),
            title="Profile",
        )
    )


@app.command()
def projects(
    client_id: int = typer.Option(None, "--client", help="Only this client's projects"),
) -> None:
    """List your projects."""
    business, _ = _stores(load_config())
    rows = business.list_projects(_session(), client_id=client_id)
    if not rows:
        console.print("[yellow]No projects yet.[/yellow]")
        return
    table = Table(title="Projects")
    for col in ("ID", "Client", "Name", "Status", "Amount", "Deadline", "Invoiced"):
        table.add_column(col)
    for p in rows:
        table.add_row(
            str(p.id),
            str(p.client_id),
            p.name,
            p.status.value,
            f"${p.amount:.2f}" if p.amount is not None else "",
            p.deadline.strftime("%Y-%m-%d") if p.deadline else "",
            "yes" if p.invoice_sent else "no",
        )
    console.print(table)


@app.command("add-project")
def add_project(
    client_id: int = typer.Argument(help="Client ID"),
    name: str = typer.Argument(help="Project name"),
    description: str = typer.Option(None, "--description", "-d"),
    amount: float = typer.Option(None, "--amount"),
    deadline: datetime = typer.Option(None, "--deadline", formats=["%Y-%m-%d"]),
    status: ProjectStatus = typer.Option(ProjectStatus.NEW, "--status"),
) -> None:
    """Add a project for a client."""
    business, _ = _stores(load_config())
    try:
        project = business.create_project(
            _session(),
            {
                "client_id": client_id,
                "name": name,
                "description": description,
                "amount": amount,
                "deadline": deadline,
                "status": status,
            },
        )
    except FreelanlyError as e:
        raise _fail(e)
    console.print(f"[green]Project #{project.id} added: {project.name}[/green]")


@app.command()
def generate(
    kind: DocumentKind = typer.Argument(help="invoice or contract"),
    project_id: int = typer.Argument(help="Project ID"),
    output: Path = typer.Option(None, "--output", "-o", help="Also export to this PDF"),
) -> None:
    """Generate an invoice or contract for a project."""
    if kind not in (DocumentKind.INVOICE, DocumentKind.CONTRACT):
        console.print("[red]Only invoice and contract can be generated here.[/red]")
        raise typer.Exit(1)
    config = load_config()
    business, resumes = _stores(config)
    assembly = DocumentAssemblyService(
        business, resumes, usage=UsageStore(config.storage.resolved_usage_db_path)
    )
    try:
        document = asyncio.run(assembly.generate(kind, project_id, _session()))
        if output is not None:
            path = export_to_file(document.body, output, config.export)
            console.print(f"[green]PDF saved: {path}[/green]")
    except FreelanlyError as e:
        raise _fail(e)
    console.print(Panel(escape(document.body), title=kind.marker))


@app.command()
def export(
    document_id: int = typer.Argument(help="Stored document ID"),
    output: Path = typer.Option(None, "--output", "-o", help="PDF path"),
) -> None:
    """Export a stored document to PDF."""
    config = load_config()
    business, _ = _stores(config)
    try:
        document = business.get_document(_session(), document_id)
        if output is None:
            output = Path(f"./output/{document.kind.value}-{document.id}.pdf")
        path = export_to_file(document.content, output, config.export)
    except FreelanlyError as e:
        raise _fail(e)
    console.print(f"[green]PDF saved: {path}[/green]")


@app.command()
def resumes() -> None:
    """List saved resumes."""
    _, store = _stores(load_config())
    rows = store.list_resumes(_session())
    if not rows:
        console.print("[yellow]No saved resumes.[/yellow]")
        return
    table = Table(title="Saved Resumes")
    for col in ("ID", "Name", "Specialization", "Updated"):
        table.add_column(col)
    for r in rows:
        table.add_row(r.id, r.name, r.specialization, r.updated_at.strftime("%Y-%m-%d %H:%M"))
    console.print(table)


@app.command()
def stats() -> None:
    """Show dashboard numbers and this month's generation usage."""
    config = load_config()
    business, _ = _stores(config)
    session = _session()
    dashboard = business.dashboard_stats(session)
    usage = UsageStore(config.storage.resolved_usage_db_path).get_monthly_stats(session.user_id)
    by_kind = ", ".join(f"{k}: {v}" for k, v in sorted(usage["by_kind"].items())) or "none"
    console.print(
        Panel(
            f"Active clients: {dashboard.active_clients}\n"
            f"Ongoing projects: {dashboard.ongoing_projects}\n"
            f"Paid revenue: ${dashboard.paid_revenue:.2f}\n"
            f"Documents: {dashboard.documents_generated}",
            title="Dashboard",
        )
    )
    console.print(
        Panel(
            f"Runs: {usage['total_runs']} ({usage['success_rate']:.0f}% ok)\n"
            f"Tokens: {usage['total_input_tokens']} in / {usage['total_output_tokens']} out\n"
            f"Cost: ${usage['total_cost_usd']:.4f}\n"
            f"By kind: {by_kind}",
            title=f"Usage {usage['month']}",
        )
    )


if __name__ == "__main__":
    app()
