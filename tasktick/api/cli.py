from tasktick.domain.errors import TaskNotFoundError, TaskValidationError, DomainError
from tasktick.domain.task import Task
from tasktick.domain.enums import DurationClass
from tasktick.domain.urgency import urgency_level, days_elapsed
from tasktick.services.task_store import TaskStore
from tasktick.adapters.memory.task_repo import InMemoryTaskRepository
from tasktick.adapters.jsonfile.task_repo import JsonTaskRepository
from tasktick.adapters.sql.task_repo import SqlTaskRepository
from tasktick.api.colors import TaskColor, urgency_color
from tasktick.api.views import group_by_duration, format_created, short_id, resolve_task_id
from tasktick.config import Settings, load_settings, BACKENDS
from tasktick.logging_setup import setup_logging
from typer import Context, Exit, Option, Typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# CLI (Typer + Rich): warstwa prezentacji dla TaskStore.
# ==========================================================
# Rola:
# - Mapuje komendy na operacje TaskStore (add/list/show/edit/toggle/rm).
# - Grupuje zadania po klasie czasu trwania i koloruje wskaźnik pilności.
# - Waliduje tytuł przed add (magazyn tego nie robi).
# - Łapie DomainError i drukuje przyjazne komunikaty.
#
# Zasady:
# - Jeden TaskStore na proces, zbudowany w callbacku i trzymany w ctx.obj.
# - Pilność liczona przy każdym wyświetleniu, względem clock.now().


app = Typer(help="tasktick: zadania, które się starzeją")
console = Console()


def build_store(settings: Settings) -> TaskStore:
    """Tworzy magazyn na bazie wybranego adaptera.
    - memory -> InMemory (bez trwałości)
    - json   -> plik JSON
    - sql    -> SQLite przez SQLAlchemy
    """
    if settings.backend == "memory":
        repo = InMemoryTaskRepository()
    elif settings.backend == "sql":
        repo = SqlTaskRepository(settings.storage_path)
    else:
        repo = JsonTaskRepository(settings.storage_path)
    logger.debug("Using %s backend (%s)", settings.backend, settings.storage_path)
    return TaskStore(repo)


@app.callback()
def main(
    ctx: Context,
    file: Optional[Path] = Option(
        None,
        "--file",
        "-f",
        help="Ścieżka do pliku danych (nadpisuje TASKTICK_FILE)",
    ),
    backend: Optional[str] = Option(
        None,
        "--backend",
        "-b",
        help=f"Rodzaj magazynu: {', '.join(BACKENDS)} (nadpisuje TASKTICK_BACKEND)",
    ),
    verbose: bool = Option(False, "--verbose", "-v", help="Logi DEBUG na stderr"),
) -> None:
    """Bootstrap zależności na starcie procesu CLI."""
    settings = load_settings()
    if backend is not None:
        if backend not in BACKENDS:
            console.print(Panel.fit(
                f"❌ Nieznany backend: {backend}\n[dim]Dostępne: {', '.join(BACKENDS)}[/]",
                title="Błąd konfiguracji",
                border_style="red",
            ))
            raise Exit(code=2)
        settings = replace(settings, backend=backend)
    if file is not None:
        settings = replace(settings, data_file=file)

    setup_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = build_store(settings)


def print_error(e: DomainError) -> None:
    if isinstance(e, TaskNotFoundError):
        console.print(Panel.fit(
            f"❌ {e}\n"
            f"[dim]Użyj 'tasktick list --all', żeby znaleźć poprawne ID[/]",
            title="Nie znaleziono",
            border_style="red",
        ))
    elif isinstance(e, TaskValidationError):
        console.print(Panel.fit(
            f"❌ {e}\n[dim]Podpowiedź: użyj np.:[/] tasktick add 'Tytuł' -d 'Opis' --duration short",
            title="Błąd walidacji",
            border_style="red",
        ))
    else:
        console.print(Panel.fit(
            f"❌ {e}",
            title="Błąd domenowy",
            border_style="red",
        ))


def render_urgency(task: Task, now: datetime) -> str:
    """Zwraca poziom pilności w Rich-markup z kolorem."""
    level = urgency_level(task, now)
    return f"{urgency_color(level)}■ {level}{TaskColor.RESET}"


def render_status(task: Task) -> str:
    if task.is_completed:
        return f"{TaskColor.GREEN}✔ Done{TaskColor.RESET}"
    return f"{TaskColor.DIM}○ Active{TaskColor.RESET}"


def render_group(duration: DurationClass, items: list[Task], now: datetime) -> None:
    """Renderuje tabelę Rich jednej grupy: ID, Title, Created, Urgency, Status."""
    table = Table(title=str(duration), title_justify="left", show_lines=False, header_style="bold")
    table.add_column("ID", no_wrap=True, style="cyan")
    table.add_column("Title")
    table.add_column("Created", no_wrap=True, style="dim")
    table.add_column("Urgency", no_wrap=True)
    table.add_column("Status", no_wrap=True)

    for t in items:
        title = f"[strike]{t.title}[/strike]" if t.is_completed else t.title
        table.add_row(
            short_id(t.task_id),
            title,
            format_created(t.created_at),
            render_urgency(t, now),
            render_status(t),
        )
    console.print(table)


@app.command("add")
def add(
    ctx: Context,
    title: str,
    desc: str = Option("", "--desc", "-d"),
    duration: DurationClass = Option(DurationClass.MEDIUM, "--duration", "-D", case_sensitive=False),
) -> None:
    """
    Dodaje nowe zadanie.

    Flow:
    - Walidacja: pusty tytuł → TaskValidationError (czerwony Panel).
    - store.add_task(title, desc, duration)
    - Sukces: Panel „✅ Dodano zadanie”, pokaż skrócone ID.
    """
    store: TaskStore = ctx.obj
    try:
        if not title or not title.strip():
            raise TaskValidationError("title", "Tytul nie moze byc pusty")
        task = store.add_task(title.strip(), desc, duration)
    except DomainError as e:
        print_error(e)
        raise Exit(code=1)

    console.print(Panel.fit(
        f"✅ Dodano zadanie\n"
        f"[cyan]ID:[/cyan] {short_id(task.task_id)}\n"
        f"[dim]Title:[/dim] {task.title}\n"
        f"[dim]Duration:[/dim] {task.duration}"
        + (f"\n[dim]Description:[/dim] {task.description}" if task.description else ""),
        title="Sukces",
        border_style="green",
    ))


@app.command("list")
def list_cmd(
    ctx: Context,
    show_all: bool = Option(False, "--all", "-a", help="Pokaż także zakończone zadania"),
) -> None:
    """
    Listuje zadania pogrupowane po klasie czasu trwania (Short, Medium, Long).

    Domyślnie tylko aktywne; --all dokłada zakończone.
    """
    store: TaskStore = ctx.obj
    tasks = store.list_tasks()
    now = store.clock.now()
    groups = group_by_duration(tasks, include_completed=show_all)

    for duration, items in groups.items():
        if items:
            render_group(duration, items, now)
        else:
            console.print(f"[bold]{duration}[/bold]\n[dim]  Brak zadań[/dim]")

    shown = sum(len(items) for items in groups.values())
    console.print(f"[dim]Pokazano {shown} z {len(tasks)} zadań[/]")


@app.command("show")
def show(ctx: Context, task_id: str) -> None:
    """
    Pokazuje szczegóły pojedynczego zadania.

    Panel z polami: ID, Title, Description, Duration, Created, Age, Urgency, Status.
    """
    store: TaskStore = ctx.obj
    try:
        task = store.get_task(resolve_task_id(store.list_tasks(), task_id))
    except DomainError as e:
        print_error(e)
        raise Exit(code=1)

    now = store.clock.now()
    lines = [
        f"ID: {task.task_id}",
        f"Title: {task.title}",
        f"Description: {task.description or '[dim]brak[/]'}",
        f"Duration: {task.duration}",
        f"Created: {format_created(task.created_at)}",
        f"Age: {days_elapsed(task.created_at, now)} d",
        f"Urgency: {render_urgency(task, now)}",
        f"Status: {render_status(task)}",
    ]
    console.print(Panel.fit("\n".join(lines), title="Szczegóły zadania", border_style="cyan"))


@app.command("edit")
def edit(
    ctx: Context,
    task_id: str,
    title: Optional[str] = Option(None, "--title", "-t"),
    desc: Optional[str] = Option(None, "--desc", "-d"),
    duration: Optional[DurationClass] = Option(None, "--duration", "-D", case_sensitive=False),
) -> None:
    """
    Edytuje tytuł, opis lub klasę czasu trwania. Pominięte pola zostają bez zmian.
    """
    store: TaskStore = ctx.obj
    try:
        task = store.get_task(resolve_task_id(store.list_tasks(), task_id))
        if title is not None and not title.strip():
            raise TaskValidationError("title", "Tytul nie moze byc pusty")
        store.update_task(
            task.task_id,
            title.strip() if title is not None else task.title,
            desc if desc is not None else task.description,
            duration if duration is not None else task.duration,
        )
        task = store.get_task(task.task_id)
    except DomainError as e:
        print_error(e)
        raise Exit(code=1)

    console.print(Panel.fit(
        f"✏️  Zapisano zmiany\nID: {short_id(task.task_id)}\n[dim]Title:[/dim] {task.title}\n[dim]Duration:[/dim] {task.duration}",
        title="Sukces",
        border_style="green",
    ))


@app.command("toggle")
def toggle(ctx: Context, task_id: str) -> None:
    """Przełącza zadanie między aktywnym a zakończonym."""
    store: TaskStore = ctx.obj
    try:
        resolved = resolve_task_id(store.list_tasks(), task_id)
        store.toggle_completion(resolved)
        task = store.get_task(resolved)
    except DomainError as e:
        print_error(e)
        raise Exit(code=1)

    console.print(Panel.fit(
        f"✅ Sukces! ID: {short_id(task.task_id)}\n[dim]Title:[/dim] {task.title}\nStatus: {render_status(task)}",
        title="Sukces",
        border_style="green",
    ))


@app.command("rm")
def rm(ctx: Context, task_ids: list[str]) -> None:
    """
    Usuwa jedno lub więcej zadań (np. `tasktick rm 1a2b 3c4d`).

    Wszystkie ID są sprawdzane przed usunięciem; jedno nieznane ID przerywa
    całą operację. Sam magazyn traktuje nieznane ID jako no-op.
    """
    store: TaskStore = ctx.obj
    tasks = store.list_tasks()
    try:
        resolved = [resolve_task_id(tasks, task_id) for task_id in task_ids]
    except DomainError as e:
        print_error(e)
        raise Exit(code=1)

    if len(resolved) == 1:
        store.delete_task(resolved[0])
    else:
        doomed = set(resolved)
        store.delete_tasks_at([i for i, t in enumerate(tasks) if t.task_id in doomed])

    ids = ", ".join(short_id(t) for t in dict.fromkeys(resolved))
    console.print(Panel.fit(
        f"🟡 Usunięto zadań: {len(set(resolved))}\nID: {ids}",
        title="Usunięto",
        border_style="yellow",
    ))


if __name__ == "__main__":
    app()
