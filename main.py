"""
Main entry point for simple-contacts.

Interactive CLI over the contact repository, or one-shot commands:
    python main.py list
    python main.py import [url]

File: main.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

import asyncio
import sys
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from simple_contacts import (
    Contact,
    ContactRepository,
    ContactStore,
    RemoteContactSource,
    Settings,
    configure_logging,
)

console = Console()

# Menu actions
ACTIONS = {
    "l": "List contacts",
    "s": "Search by name or phone",
    "f": "Toggle favorites-only",
    "a": "Add contact",
    "e": "Edit contact",
    "d": "Delete contact",
    "t": "Toggle favorite",
    "i": "Import from API",
}


def show_contacts(repo: ContactRepository):
    """Render the filtered snapshot, or the load error."""
    if repo.error:
        console.print(f"[red]Could not load contacts:[/] {repo.error}")
        return

    contacts = repo.filtered_contacts
    title = f"Contacts ({len(contacts)}/{len(repo.contacts)})"
    if repo.query:
        title += f"  search: '{repo.query}'"
    if repo.favorites_only:
        title += "  [yellow]favorites only[/]"

    table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("", width=1)
    table.add_column("Name", style="white")
    table.add_column("Phone", style="dim")
    table.add_column("Email", style="dim")

    for contact in contacts:
        star = "[yellow]★[/]" if contact.favorite else ""
        table.add_row(str(contact.id), star, contact.name, contact.phone or "-", contact.email or "-")

    if not contacts:
        console.print("[dim]No contacts match.[/]")
    console.print(table)


def show_menu():
    """Display the main menu."""
    console.print()
    table = Table(box=box.ROUNDED, show_header=False)
    table.add_column("Key", style="cyan", width=3)
    table.add_column("Action", style="white")
    for key, name in ACTIONS.items():
        table.add_row(key, name)
    table.add_row("q", "Quit")
    console.print(table)


def _find_contact(repo: ContactRepository, contact_id: int) -> Optional[Contact]:
    for contact in repo.contacts:
        if contact.id == contact_id:
            return contact
    return None


def _report(result, success: str):
    """Print a mutation outcome, keeping write and refresh failures apart."""
    if not result.ok:
        for field_name, message in result.field_errors.items():
            console.print(f"  [red]{field_name}:[/] {message}")
        if not result.field_errors:
            console.print(f"[red]Failed:[/] {result.error}")
        return
    console.print(f"[green]{success}[/]")
    if not result.refreshed:
        console.print(f"[yellow]Saved, but reloading the list failed:[/] {result.refresh_error}")


async def _add(repo: ContactRepository):
    name = Prompt.ask("Name")
    phone = Prompt.ask("Phone", default="")
    email = Prompt.ask("Email", default="")
    result = await repo.add(name, phone, email)
    _report(result, f"Added contact #{result.contact_id}")


async def _edit(repo: ContactRepository):
    contact = _find_contact(repo, IntPrompt.ask("Contact ID"))
    if contact is None:
        console.print("[red]No contact with that ID.[/]")
        return
    name = Prompt.ask("Name", default=contact.name)
    phone = Prompt.ask("Phone", default=contact.phone or "")
    email = Prompt.ask("Email", default=contact.email or "")
    result = await repo.update(contact.id, name, phone, email)
    _report(result, f"Updated {name.strip()}")


async def _delete(repo: ContactRepository):
    contact = _find_contact(repo, IntPrompt.ask("Contact ID"))
    if contact is None:
        console.print("[red]No contact with that ID.[/]")
        return
    if not Confirm.ask(f"Delete {contact.name}?", default=False):
        console.print("[dim]Cancelled.[/]")
        return
    result = await repo.delete(contact.id)
    _report(result, f"Deleted {contact.name}")


async def _toggle_favorite(repo: ContactRepository):
    contact = _find_contact(repo, IntPrompt.ask("Contact ID"))
    if contact is None:
        console.print("[red]No contact with that ID.[/]")
        return
    result = await repo.toggle_favorite(contact)
    state = "removed from" if contact.favorite else "added to"
    _report(result, f"{contact.name} {state} favorites")


async def _import(repo: ContactRepository, url: Optional[str] = None):
    with console.status("[dim]Importing contacts...[/]"):
        result = await repo.import_contacts(url)

    if result.skipped:
        console.print("[yellow]An import is already running.[/]")
    elif not result.ok:
        console.print(f"[red]Import failed:[/] {result.error}")
        if result.imported_count:
            console.print(f"[dim]{result.imported_count} contacts were added before the failure.[/]")
    else:
        console.print(
            f"[green]Imported {result.imported_count} new contacts[/] "
            f"[dim]({result.fetched_count} fetched)[/]"
        )
        if not result.refreshed:
            console.print(f"[yellow]Reloading the list failed:[/] {result.refresh_error}")


async def run_interactive(repo: ContactRepository):
    """Menu loop."""
    console.print(
        Panel.fit("[bold cyan]Simple Contacts[/]", border_style="cyan")
    )
    with console.status("[dim]Loading contacts...[/]"):
        await repo.refresh()
    show_contacts(repo)

    while True:
        show_menu()
        choice = Prompt.ask(
            "Select action",
            choices=list(ACTIONS.keys()) + ["q"],
            default="l",
        )

        if choice == "q":
            console.print("[dim]Goodbye![/]")
            break
        elif choice == "l":
            await repo.refresh()
        elif choice == "s":
            repo.set_query(Prompt.ask("Search (empty to clear)", default=""))
        elif choice == "f":
            repo.toggle_favorites_only()
        elif choice == "a":
            await _add(repo)
        elif choice == "e":
            await _edit(repo)
        elif choice == "d":
            await _delete(repo)
        elif choice == "t":
            await _toggle_favorite(repo)
        elif choice == "i":
            await _import(repo)

        show_contacts(repo)


async def main():
    """Main entry point."""
    settings = Settings.from_env()
    configure_logging(settings)

    store = ContactStore(settings.db_path)
    repo = ContactRepository(store, RemoteContactSource(), import_url=settings.import_url)

    try:
        # Command-line arguments for non-interactive use
        if len(sys.argv) > 1:
            command = sys.argv[1].lower()
            if command == "list":
                await repo.refresh()
                show_contacts(repo)
            elif command == "import":
                url = sys.argv[2] if len(sys.argv) > 2 else None
                await _import(repo, url)
            else:
                console.print(f"[red]Unknown command: {command}[/]")
                console.print("[dim]Valid commands: list, import <url>[/]")
            return

        await run_interactive(repo)
    finally:
        await repo.close()


def cli():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
