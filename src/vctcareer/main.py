"""
VCTCareer - CLI Entry Point.

Usage:
    vctcareer onboard            Walk the roadmap and create a career
    vctcareer onboard --offline  Same, placing the career locally
    vctcareer placement          Show the stored placement
    vctcareer health             Check configuration and career service
"""

import asyncio
import json
import logging
import sys

import httpx
import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.spinner import Spinner
from rich.table import Table

from onboarding import (
    HttpSubmissionGateway,
    IntakeFormController,
    LocalPlacementGateway,
    OnboardingSession,
    PlacementStore,
    RouteNavigator,
    SubmissionStatus,
)
from onboarding.errors import PlacementPersistenceError
from onboarding.forms import (
    DIVISION_OPTIONS,
    EXPERIENCE_OPTIONS,
    MAX_AGE,
    MIN_AGE,
    NO_EXPERIENCE,
    RANK_OPTIONS,
)
from onboarding.page import Page

app = typer.Typer(
    name="vctcareer",
    help="VCTCareer - start your Valorant esports career.",
    add_completion=False,
)
console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Rendering
# =============================================================================

def render_roadmap(session: OnboardingSession) -> Table:
    stepper = session.stepper
    table = Table(show_header=False, box=None, padding=(0, 1))
    for idx, milestone in enumerate(stepper.milestones):
        if idx == stepper.active_index:
            table.add_row("[bold #6366f1]●[/]", f"[bold white]{milestone}[/]")
        else:
            table.add_row("[dim]○[/]", f"[dim]{milestone}[/]")
    return table


def render_start_card(session: OnboardingSession) -> Panel:
    if session.can_start:
        body = "[bold #6366f1]Start your career[/]\nPress [bold]s[/] to get started."
    else:
        body = "[dim]Start your career[/]\n[dim]Scroll through the roadmap to unlock.[/]"
    return Panel.fit(body, border_style="#6366f1" if session.can_start else "grey37")


# =============================================================================
# Screens
# =============================================================================

def run_roadmap(session: OnboardingSession) -> bool:
    """Landing roadmap. Returns True once the user starts, False on quit."""
    page = session.stepper.page
    with session.stepper.attached():
        while True:
            console.print(render_roadmap(session))
            console.print(render_start_card(session))
            key = Prompt.ask(
                "[dim]j/Enter = scroll down, k = scroll up, s = start, q = quit[/dim]",
                default="j",
                show_default=False,
            ).strip().lower()

            if key == "q":
                return False
            if key == "s":
                if session.can_start:
                    return True
                console.print("[yellow]Reach the last milestone first.[/yellow]")
                continue
            if key in ("j", ""):
                page.dispatch_wheel(1.0)
            elif key == "k":
                page.dispatch_wheel(-1.0)


def fill_intake(form: IntakeFormController) -> None:
    """Prompt for every field, honoring the form's locks."""
    while True:
        age = IntPrompt.ask(f"Age [dim]({MIN_AGE}-{MAX_AGE})[/dim]")
        form.set_age(age)
        if form.state.age == age:
            break
        console.print(f"[red]Age must be between {MIN_AGE} and {MAX_AGE}.[/red]")

    rank = Prompt.ask("Current rank", choices=RANK_OPTIONS)
    form.set_rank(rank)

    if form.division_enabled:
        form.set_division(Prompt.ask("Division", choices=DIVISION_OPTIONS))

    if form.experience_enabled:
        form.set_experience(Prompt.ask("Past experience (tier)", choices=EXPERIENCE_OPTIONS))
    else:
        console.print(f"Past experience (tier): [dim]{NO_EXPERIENCE} (requires a higher rank)[/dim]")


def run_intake(form: IntakeFormController) -> bool:
    """Intake form. Returns True once a placement was created."""
    fill_intake(form)

    while True:
        with Live(Spinner("dots", text="Creating your career..."), console=console, transient=True):
            outcome = asyncio.run(form.submit())

        if form.status == SubmissionStatus.SUCCEEDED:
            return True

        for error in outcome.errors:
            console.print(f"[red]{error}[/red]")

        if not Confirm.ask("Try again?", default=True):
            return False
        if not outcome.accepted:
            fill_intake(form)


def run_confirmation(form: IntakeFormController) -> bool:
    confirmation = form.confirmation
    result = confirmation.result
    console.print(
        Panel.fit(
            f"[bold #a3e635]Placement Complete![/]\n"
            f"You have been placed in [bold #6366f1]{confirmation.starting_tier}[/]!",
            title="Career Created",
            border_style="#6366f1",
        )
    )
    console.print_json(json.dumps(result.career_info))

    while True:
        Prompt.ask("Press Enter to continue", default="", show_default=False)
        try:
            confirmation.acknowledge()
            return True
        except PlacementPersistenceError as e:
            console.print(f"[red]Could not save your placement: {e}[/red]")
            if not Confirm.ask("Try again?", default=True):
                return False


# =============================================================================
# Commands
# =============================================================================

@app.command()
def onboard(
    offline: bool = typer.Option(False, "--offline", help="Place the career locally instead of calling the career service"),
) -> None:
    """Walk the roadmap and create a career."""
    from vctcareer.config import get_settings

    settings = get_settings()
    configure_logging(settings.log_level)

    if offline:
        gateway = LocalPlacementGateway()
    else:
        gateway = HttpSubmissionGateway(settings.gateway_url, timeout=settings.gateway_timeout_seconds)

    navigator = RouteNavigator()
    session = OnboardingSession(
        gateway=gateway,
        store=PlacementStore(settings.storage_path),
        navigator=navigator,
        page=Page(),
        throttle_window=settings.scroll_throttle_seconds,
        destination=settings.post_onboarding_route,
    )

    console.print(
        Panel.fit(
            "[bold]Welcome to VCTCareer[/bold]\n"
            "A simulator where you get to choose your starting point and develop "
            "as a player and a professional.",
            border_style="#6366f1",
        )
    )

    try:
        if not run_roadmap(session):
            console.print("\n[dim]Goodbye![/dim]")
            return
        form = session.open_intake()
        if not run_intake(form):
            raise typer.Exit(code=1)
        if not run_confirmation(form):
            raise typer.Exit(code=1)
        console.print(f"\n[green]Saved.[/green] [dim]Now at {navigator.current_route}[/dim]")
    except KeyboardInterrupt:
        console.print("\n\n[dim]Onboarding interrupted.[/dim]")
    finally:
        session.close()


@app.command()
def placement(
    clear: bool = typer.Option(False, "--clear", help="Delete the stored placement"),
) -> None:
    """Show the stored placement."""
    from vctcareer.config import settings

    store = PlacementStore(settings.storage_path)
    if clear:
        try:
            store.remove()
        except PlacementPersistenceError as e:
            console.print(f"[red]Could not clear placement: {e}[/red]")
            raise typer.Exit(code=1)
        console.print("[dim]Placement cleared.[/dim]")
        return

    record = store.read()
    if record is None:
        console.print("[yellow]No placement stored yet. Run `vctcareer onboard`.[/yellow]")
        raise typer.Exit(code=1)

    console.print(f"[bold]Starting tier:[/bold] {record.get('starting_tier', '?')}")
    console.print_json(json.dumps(record.get("career_info", {})))


@app.command()
def health() -> None:
    """Check configuration and career service reachability."""
    from vctcareer.config import get_settings

    console.print("\n[bold]VCTCareer Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("✅ Configuration loaded")
        console.print(f"   Environment: {settings.vct_env}")
        console.print(f"   Log level: {settings.log_level}")
        console.print(f"   Storage: {settings.storage_path}")
    except Exception as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(code=1)

    try:
        response = httpx.get(settings.gateway_url, timeout=5.0)
        console.print(f"✅ Career service reachable ({response.status_code})")
    except httpx.HTTPError as e:
        console.print(f"⚠️  Career service unreachable at {settings.gateway_url}: {e}")
        console.print("   [dim]Use `vctcareer onboard --offline` to place locally.[/dim]")

    console.print("\n[green]Health check complete![/green]")


if __name__ == "__main__":
    app()
