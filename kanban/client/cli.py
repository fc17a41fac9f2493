"""``kanban-board``: drive the board from a terminal."""

import functools
import logging

import click

from kanban.client.api import ApiError, TaskApiClient
from kanban.client.board import COLUMN_TO_UI, UI_COLUMNS, BoardController
from kanban.client.storage import LocalStorage, LocalTaskStore
from kanban.columns import normalize_column
from kanban.config import ClientConfig
from kanban.exceptions import TaskError
from kanban.telemetry import attach_log_handler, setup_telemetry, telemetry_enabled


HEADINGS = {"todo": "To Do", "inprogress": "In Progress", "done": "Done"}


def _celebrate(task: dict) -> None:
    click.secho(f"Nice work! '{task['content']}' is done.", fg="green")


def _alert(message: str) -> None:
    click.secho(message, fg="red", err=True)


@click.group()
@click.option("--api-url", default=ClientConfig.API_URL, show_default=True, help="Task API root.")
@click.option(
    "--storage",
    "storage_path",
    default=ClientConfig.LOCAL_STORAGE_PATH,
    show_default=True,
    help="Local fallback store.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
@click.pass_context
def cli(ctx: click.Context, api_url: str, storage_path: str, verbose: bool) -> None:
    """Kanban board client with an offline fallback."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    if telemetry_enabled():
        setup_telemetry(server=False)
        attach_log_handler()

    controller = BoardController(
        TaskApiClient(api_url, timeout=ClientConfig.REQUEST_TIMEOUT),
        LocalTaskStore(LocalStorage(storage_path)),
        on_celebrate=_celebrate,
        on_alert=_alert,
    )
    ctx.obj = controller


def pass_board(command):
    """Pass the controller to ``command`` after loading the board.

    Loading happens here rather than in the group so that ``--help`` and
    usage errors never wait on the network.
    """

    @click.pass_obj
    @functools.wraps(command)
    def wrapper(controller: BoardController, *args, **kwargs):
        try:
            controller.load()
        except ApiError as exc:
            raise click.ClickException(exc.message) from exc
        return command(controller, *args, **kwargs)

    return wrapper


@cli.command()
@pass_board
def show(controller: BoardController) -> None:
    """Print the board."""
    if controller.state.offline:
        click.secho("(offline mode)", fg="yellow")
    for ui_column in UI_COLUMNS:
        click.secho(HEADINGS[ui_column], bold=True)
        for task in controller.state.columns[ui_column]:
            click.echo(f"  {task['id']}  {task['content']}")


@cli.command()
@click.argument("text")
@pass_board
def add(controller: BoardController, text: str) -> None:
    """Add a task to the To Do column."""
    try:
        task = controller.add_task(text)
    except TaskError as exc:
        raise click.UsageError(exc.message) from exc
    if task is None:
        click.secho("Could not add task.", fg="yellow")
        return
    suffix = " (offline mode)" if controller.state.offline else ""
    click.echo(f"Added {task['id']}{suffix}")


@cli.command()
@click.argument("task_id")
@pass_board
def rm(controller: BoardController, task_id: str) -> None:
    """Delete a task."""
    if not controller.delete_task(task_id):
        raise click.ClickException(f"Could not delete {task_id}")
    click.echo(f"Deleted {task_id}")


@cli.command()
@click.argument("task_id")
@click.argument("column")
@pass_board
def move(controller: BoardController, task_id: str, column: str) -> None:
    """Move a task to COLUMN (todo, in_progress or done)."""
    try:
        target = normalize_column(column)
    except TaskError as exc:
        raise click.BadParameter(exc.message, param_hint="COLUMN") from exc

    located = controller.state.locate(task_id)
    if located is None:
        raise click.BadParameter(f"Task not found: {task_id}", param_hint="TASK_ID")

    target_ui = COLUMN_TO_UI[target.value]
    if located[0] == target_ui:
        click.echo(f"{task_id} is already in {HEADINGS[target_ui]}")
    elif controller.drop(task_id, target_ui):
        click.echo(f"Moved {task_id} to {HEADINGS[target_ui]}")
    else:
        click.secho(f"Moved {task_id} on the board, but the move was not saved.", fg="yellow")
