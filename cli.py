# cli.py
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pyproducts import ProductClient, ClientError

console = Console()
c = ProductClient(
    base_url=os.environ.get("PRODUCTS_API_URL", "http://127.0.0.1:3000"),
    api_key=os.environ.get("API_KEY", "your-secret-api-key"),
)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("Stock", width=8)
    table.add_column("Description", width=36)

    for p in products:
        stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            stock,
            p.get("description", "")
        )
    console.print(table)


def show_page(page: Dict[str, Any]):
    show_products(page.get("products", []))
    console.print(
        f"[dim]Page {page.get('currentPage')} of {page.get('totalPages')} "
        f"({page.get('totalProducts')} matching, {page.get('itemsPerPage')} per page)[/dim]"
    )


def show_statistics(stats: Dict[str, Any]):
    table = Table(title="📊 Catalogue statistics", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Category")
    table.add_column("Products", justify="right")
    for category, count in sorted(stats.get("productsByCategory", {}).items()):
        table.add_row(category, str(count))
    console.print(table)
    console.print(Panel.fit(
        f"Total: [bold]{stats.get('totalProducts', 0)}[/bold]   "
        f"In stock: [green]{stats.get('inStockCount', 0)}[/green]   "
        f"Out of stock: [red]{stats.get('outOfStockCount', 0)}[/red]",
        border_style="yellow"
    ))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API and connection errors are shown in the status panel and yield None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except ClientError as e:
        status_message = f"Error: {e.message}"
    except OSError as e:
        # requests' connection errors derive from OSError
        status_message = f"Error: cannot reach API ({e})"
    console.print(show_status(status_message, False))
    return None


def refresh_cache():
    global product_cache
    page = try_api(c.list_products, limit=100)
    product_cache = page["products"] if page else []


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    if not product_cache:
        refresh_cache()
    return WordCompleter([p["id"] for p in product_cache], ignore_case=True, meta_dict={
        p["id"]: p["name"] for p in product_cache
    })


def get_category_completer():
    if not product_cache:
        refresh_cache()
    return WordCompleter(sorted({p["category"] for p in product_cache}), ignore_case=True)


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Product API",
        "[bold blue]Catalogue CLI with Autocomplete[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": prompt_with_autocomplete("🏷️ Name", default=current.get("name", "")),
        "description": prompt_with_autocomplete("📝 Description", default=current.get("description", "")),
        "price": ask_float("💰 Price", default=current.get("price", 10.0)),
        "category": prompt_with_autocomplete("📂 Category", completer=get_category_completer(),
                                             default=current.get("category", "")),
        "in_stock": Confirm.ask("📦 In stock?", default=current.get("inStock", True)),
    }


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "✏️ Update product"),
            ("2", "🔍 Search / filter", "6", "🗑️ Delete product"),
            ("3", "ℹ️ Get product by ID", "7", "📊 Statistics"),
            ("4", "➕ Create product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            page_no = IntPrompt.ask("Page", default=1)
            limit = IntPrompt.ask("Per page", default=10)
            page = try_api(c.list_products, page=page_no, limit=limit, success_msg="Products loaded")
            if page:
                show_page(page)

        elif choice == "2":
            term = prompt_with_autocomplete("Name contains (blank for any)").strip()
            category = prompt_with_autocomplete("Category (blank for any)", completer=get_category_completer()).strip()
            page = try_api(c.list_products, category=category or None, search=term or None,
                           success_msg="Search completed")
            if page:
                show_page(page)

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
            if resp:
                show_products([resp])

        elif choice == "4":
            fields = ask_product_fields()
            resp = try_api(c.create_product, **fields, success_msg=f"Product '{fields['name']}' created")
            if resp:
                show_products([resp])
                refresh_cache()

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid)
            if current:
                fields = ask_product_fields(current)
                resp = try_api(c.update_product, pid, **fields, success_msg=f"Product {pid} updated")
                if resp:
                    show_products([resp])
                    refresh_cache()

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                refresh_cache()

        elif choice == "7":
            stats = try_api(c.statistics, success_msg="Statistics loaded")
            if stats:
                show_statistics(stats)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
