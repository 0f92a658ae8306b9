import typer
import logging
import time
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from typing import Optional
from datetime import datetime, date

from pydantic import ValidationError

from studytrack.config import settings
from studytrack.database import SessionLocal, init_db
from studytrack.crud import (
    create_profile, get_active_profile, to_schema,
    update_allocation, update_budget, save_schedule_plan,
    complete_onboarding, set_motivation, get_weekly_data, get_progress
)
from studytrack.exceptions import IncompletePlanError, StudyTrackError
from studytrack.goals import compute_daily_goals, summarize_budget
from studytrack.ledger import minutes_from_seconds, total_for_week, totals_by_skill
from studytrack.planner import (
    auto_distribute_skill, diagnose, generate_default_plan,
    is_complete, planned_total, update_cell
)
from studytrack.schemas import (
    DAYS_OF_WEEK, MOTIVATION_LEVELS, SKILLS, Day, ProfileCreate, Skill,
    SkillAllocation, TimeBudget, WeeklyGoals, WeeklyReflection, WeeklySchedulePlan,
    day_for_date, validate_allocation, validate_budget
)
from studytrack.success import compute_average_success_rate, format_minutes
from studytrack import timer as stopwatch
from studytrack.tracker import (
    load_current_week, record_practice, record_timed_session,
    refresh_progress, save_reflection, session_target_minutes, todays_plan
)
from studytrack.weeks import current_week_number, week_status

app = typer.Typer(help="Study Tracker CLI - skill goals, weekly plans and practice tracking")
console = Console()


@app.callback()
def main():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)]
    )


def _parse_date(value: Optional[str]) -> date:
    if value:
        return datetime.strptime(value, "%Y-%m-%d").date()
    return date.today()


def _parse_skill(value: str) -> Skill:
    try:
        return Skill(value.strip().lower())
    except ValueError:
        raise typer.BadParameter(f"Unknown skill '{value}'. Use one of: {', '.join(s.value for s in SKILLS)}")


def _parse_day(value: str) -> Day:
    try:
        return Day(value.strip().lower())
    except ValueError:
        raise typer.BadParameter(f"Unknown day '{value}'. Use one of: {', '.join(d.value for d in DAYS_OF_WEEK)}")


def _load_profile(db):
    profile = get_active_profile(db)
    if not profile:
        console.print("[red]✗[/red] No profile yet. Run [bold]onboard[/bold] first.")
        raise typer.Exit(code=1)
    return profile


def _prompt_allocation() -> SkillAllocation:
    console.print("[bold]Skill priorities[/bold] (percentages, must add up to 100)")
    while True:
        values = {
            skill.value: typer.prompt(f"  {skill.value.capitalize()} %", type=int)
            for skill in SKILLS
        }
        try:
            allocation = SkillAllocation(**values)
        except ValidationError as e:
            console.print(f"[red]✗[/red] {e.errors()[0]['msg']}")
            continue
        if validate_allocation(allocation):
            return allocation
        console.print(f"[red]✗[/red] Percentages add up to {allocation.total()}, not 100. Try again.")


def _plan_table(plan: WeeklySchedulePlan, goals: WeeklyGoals, title: str = "Weekly Schedule Plan") -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Skill", style="cyan")
    for day in DAYS_OF_WEEK:
        table.add_column(day.value[:3].capitalize(), justify="right")
    table.add_column("Planned", style="green", justify="right")
    table.add_column("Goal", style="blue", justify="right")

    for skill in SKILLS:
        planned = planned_total(plan, skill)
        goal = goals.minutes_for(skill)
        style = "" if planned == goal else "yellow"
        table.add_row(
            skill.value,
            *[str(plan.for_day(day).minutes_for(skill)) for day in DAYS_OF_WEEK],
            f"[{style}]{planned}[/{style}]" if style else str(planned),
            str(goal)
        )
    return table


def _print_diagnosis(plan: WeeklySchedulePlan, goals: WeeklyGoals):
    for delta in diagnose(plan, goals):
        word = "over" if delta.delta_minutes > 0 else "short"
        console.print(f"  [yellow]{delta.skill.value}[/yellow]: {abs(delta.delta_minutes)} min {word}")


@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")


@app.command()
def reset_db():
    """Delete all data and reinitialize database (WARNING: irreversible!)"""
    confirm = typer.confirm("⚠️  This will DELETE ALL DATA. Are you sure?")
    if not confirm:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    from studytrack.database import engine, Base
    import studytrack.models  # noqa: F401
    console.print("[yellow]Dropping all tables...[/yellow]")
    Base.metadata.drop_all(bind=engine)
    console.print("[yellow]Recreating tables...[/yellow]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓[/green] Database reset complete! All data deleted.")


@app.command()
def onboard(
    days: int = typer.Option(..., prompt="Study days per week (1-7)"),
    minutes: int = typer.Option(..., prompt="Minutes per study day (1-240)"),
    start_date: Optional[str] = typer.Option(None, help="Start date (YYYY-MM-DD), default: today")
):
    """Create the learner profile, goals and default schedule"""
    init_db()
    db = SessionLocal()
    try:
        if get_active_profile(db):
            console.print("[yellow]A profile already exists. Use edit-priorities / edit-schedule.[/yellow]")
            return

        budget = TimeBudget(days_per_week=days, minutes_per_day=minutes)
        if not validate_budget(budget):
            console.print("[red]✗[/red] Days per week must be 1-7 and minutes per day 1-240")
            return
        summary = summarize_budget(budget)
        console.print(
            f"  That is {format_minutes(summary.weekly_minutes)} per week, "
            f"~{summary.monthly_hours} hours per month, ~{summary.yearly_hours} hours per year"
        )

        allocation = _prompt_allocation()
        profile_data = ProfileCreate(allocation=allocation, budget=budget, start_date=_parse_date(start_date))
        profile = create_profile(db, profile_data)
        complete_onboarding(db, profile.id)

        console.print(f"[green]✓[/green] Profile created successfully! ID: {profile.id}")
        profile_view = to_schema(profile)
        console.print(_plan_table(profile_view.schedule_plan, profile_view.weekly_goals, "Default Schedule"))
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid profile: {e.errors()[0]['msg']}")
    except Exception as e:
        console.print(f"[red]✗[/red] Error: {str(e)}")
    finally:
        db.close()


@app.command()
def view_profile():
    """View learner profile"""
    db = SessionLocal()
    try:
        profile = to_schema(_load_profile(db))
        week = current_week_number(profile.start_date)

        console.print("\n[bold]Learner Profile[/bold]")
        console.print(f"  ID: {profile.id}")
        console.print(f"  Started: {profile.start_date} (week {week})")
        console.print(f"  Study plan: {profile.budget.minutes_per_day} min/day, {profile.budget.days_per_week} days/week")
        console.print(f"  Motivation: {profile.motivation}")
        console.print("  Priorities:")
        for skill in SKILLS:
            console.print(f"    {skill.value}: {profile.allocation.minutes_for(skill)}%")
    finally:
        db.close()


@app.command()
def edit_priorities():
    """Change skill priority percentages"""
    db = SessionLocal()
    try:
        profile = _load_profile(db)
        allocation = _prompt_allocation()
        update_allocation(db, profile.id, allocation)
        console.print("[green]✓[/green] Priorities updated and weekly goals recalculated!")
    except StudyTrackError as e:
        console.print(f"[red]✗[/red] {str(e)}")
    finally:
        db.close()


@app.command()
def edit_schedule(
    days: int = typer.Option(..., prompt="Study days per week (1-7)"),
    minutes: int = typer.Option(..., prompt="Minutes per study day (1-240)")
):
    """Change the weekly time budget"""
    db = SessionLocal()
    try:
        profile = _load_profile(db)
        update_budget(db, profile.id, TimeBudget(days_per_week=days, minutes_per_day=minutes))
        console.print("[green]✓[/green] Schedule updated and weekly goals recalculated!")
    except ValueError as e:
        console.print(f"[red]✗[/red] {str(e)}")
    finally:
        db.close()


@app.command()
def view_goals():
    """View weekly and daily goals per skill"""
    db = SessionLocal()
    try:
        profile = to_schema(_load_profile(db))
        daily = compute_daily_goals(profile.weekly_goals, profile.budget)

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Skill", style="cyan")
        table.add_column("Priority", justify="right")
        table.add_column("Weekly Goal", style="green", justify="right")
        table.add_column("Per Study Day", style="blue", justify="right")
        for skill in SKILLS:
            table.add_row(
                skill.value,
                f"{profile.allocation.minutes_for(skill)}%",
                format_minutes(profile.weekly_goals.minutes_for(skill)),
                format_minutes(daily.minutes_for(skill))
            )
        console.print(table)
        console.print(f"Total: {format_minutes(profile.weekly_goals.total())} per week")
    finally:
        db.close()


@app.command()
def view_plan():
    """View the saved weekly schedule plan"""
    db = SessionLocal()
    try:
        profile = to_schema(_load_profile(db))
        console.print(_plan_table(profile.schedule_plan, profile.weekly_goals))
    finally:
        db.close()


@app.command()
def edit_plan():
    """Edit the schedule plan interactively"""
    db = SessionLocal()
    try:
        profile = to_schema(_load_profile(db))
        goals = profile.weekly_goals
        plan = profile.schedule_plan

        console.print("Commands: [bold]set <day> <skill> <minutes>[/bold], [bold]auto <skill>[/bold], "
                      "[bold]default[/bold], [bold]save[/bold], [bold]quit[/bold]")
        while True:
            console.print(_plan_table(plan, goals, "Editing Schedule Plan"))
            parts = typer.prompt(">").split()
            if not parts:
                continue
            command = parts[0].lower()
            try:
                if command == "set" and len(parts) == 4:
                    plan = update_cell(plan, _parse_day(parts[1]), _parse_skill(parts[2]), int(parts[3]))
                elif command == "auto" and len(parts) == 2:
                    plan = auto_distribute_skill(plan, _parse_skill(parts[1]), goals)
                elif command == "default":
                    plan = generate_default_plan(profile.allocation, profile.budget)
                elif command == "save":
                    if not is_complete(plan, goals):
                        console.print("[red]✗[/red] Incomplete schedule:")
                        _print_diagnosis(plan, goals)
                        continue
                    save_schedule_plan(db, profile.id, plan)
                    console.print("[green]✓[/green] Schedule plan saved!")
                    return
                elif command == "quit":
                    console.print("[yellow]Discarded changes.[/yellow]")
                    return
                else:
                    console.print(f"[red]✗[/red] Unknown command: {' '.join(parts)}")
            except (typer.BadParameter, ValueError) as e:
                console.print(f"[red]✗[/red] {str(e)}")
    except IncompletePlanError as e:
        console.print(f"[red]✗[/red] {str(e)}")
    finally:
        db.close()


@app.command()
def log(
    skill: str = typer.Option(..., prompt="Skill"),
    minutes: Optional[int] = typer.Option(None, help="Minutes practiced"),
    seconds: Optional[int] = typer.Option(None, help="Elapsed seconds (rounded down to minutes)"),
    session_date: Optional[str] = typer.Option(None, help="Session date (YYYY-MM-DD), default: today")
):
    """Record a practice session manually"""
    db = SessionLocal()
    try:
        profile = _load_profile(db)
        skill_type = _parse_skill(skill)
        sess_date = _parse_date(session_date)

        if minutes is None and seconds is None:
            minutes = typer.prompt("Minutes practiced", type=int)
        if minutes is None:
            if seconds < stopwatch.MIN_SESSION_SECONDS:
                console.print("[red]✗[/red] Sessions must last at least 1 minute to be saved")
                return
            minutes = minutes_from_seconds(seconds)

        week = record_practice(db, profile, skill_type, minutes, sess_date)
        console.print(f"[green]✓[/green] Added {minutes} min of {skill_type.value}")
        console.print(f"  Week {week.week_number} success: {week.success_rates.rate_for(skill_type):.0%}")
    except StudyTrackError as e:
        console.print(f"[red]✗[/red] {str(e)}")
    except Exception as e:
        console.print(f"[red]✗[/red] Error: {str(e)}")
    finally:
        db.close()


@app.command()
def practice(skill: str = typer.Argument(..., help="Skill to practice")):
    """Run a stopwatch for a skill and save the session"""
    db = SessionLocal()
    try:
        profile = _load_profile(db)
        skill_type = _parse_skill(skill)
        target = session_target_minutes(profile, skill_type)
        state = stopwatch.start(stopwatch.create_timer(target, skill_type), time.monotonic())
        console.print(f"⏱  {skill_type.value} session started (target {target} min)")

        while True:
            action = typer.prompt("[p]ause/resume, [s]ave, [r]eset, [q]uit", default="s").lower()
            now = time.monotonic()
            elapsed = int(stopwatch.elapsed_seconds(state, now))
            if action == "p":
                if state.is_running:
                    state = stopwatch.pause(state, now)
                    console.print(f"  Paused at {elapsed // 60}:{elapsed % 60:02d}")
                else:
                    state = stopwatch.resume(state, now)
                    console.print("  Resumed")
            elif action == "r":
                state = stopwatch.start(stopwatch.reset(state), now)
                console.print("  Timer reset")
            elif action == "s":
                week = record_timed_session(db, profile, state, now)
                console.print(f"[green]✓[/green] Session saved! {elapsed // 60} min of {skill_type.value}")
                console.print(f"  Week {week.week_number} success: {week.success_rates.rate_for(skill_type):.0%}")
                return
            elif action == "q":
                console.print("[yellow]Session discarded.[/yellow]")
                return
            if stopwatch.is_finished(state, now):
                console.print("[bold green]Time's up![/bold green] Your session target is reached.")
    except StudyTrackError as e:
        console.print(f"[red]✗[/red] {str(e)}")
    finally:
        db.close()


@app.command()
def today():
    """Show today's plan next to what has been practiced"""
    db = SessionLocal()
    try:
        profile = _load_profile(db)
        now = date.today()
        plan = todays_plan(profile, now)
        week = load_current_week(db, profile, now)
        done = week.daily_practice.for_day(day_for_date(now))

        table = Table(title=f"{now.strftime('%A %Y-%m-%d')}", show_header=True, header_style="bold magenta")
        table.add_column("Skill", style="cyan")
        table.add_column("Planned", style="blue", justify="right")
        table.add_column("Practiced", style="green", justify="right")
        for skill in SKILLS:
            table.add_row(skill.value, str(plan.minutes_for(skill)), str(done.minutes_for(skill)))
        console.print(table)
    finally:
        db.close()


@app.command()
def week(week_number: Optional[int] = typer.Option(None, help="Week number, default: current week")):
    """Show practice and success rates for a week"""
    if week_number is not None and week_number < 1:
        raise typer.BadParameter("Week numbers start at 1", param_hint="--week-number")
    db = SessionLocal()
    try:
        profile = _load_profile(db)
        goals = to_schema(profile).weekly_goals
        current = current_week_number(profile.start_date)
        number = current if week_number is None else week_number
        data = get_weekly_data(db, profile.id, number)
        stored = data is not None
        if not data:
            if number != current:
                console.print(f"[yellow]No data for week {number}[/yellow]")
                return
            data = load_current_week(db, profile)

        status = week_status(data, number, current, stored=stored)
        console.print(f"\n[bold]Week {data.week_number}[/bold] ({data.date_range.start} → {data.date_range.end}) [dim]{status.value}[/dim]")
        totals = totals_by_skill(data.daily_practice)

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Skill", style="cyan")
        table.add_column("Practiced", style="green", justify="right")
        table.add_column("Goal", style="blue", justify="right")
        table.add_column("Success", justify="right")
        for skill in SKILLS:
            table.add_row(
                skill.value,
                format_minutes(totals[skill]),
                format_minutes(goals.minutes_for(skill)),
                f"{data.success_rates.rate_for(skill):.0%}"
            )
        console.print(table)
        console.print(f"Total: {format_minutes(total_for_week(data.daily_practice))}, "
                      f"overall success {compute_average_success_rate(data.success_rates):.0%}")
    finally:
        db.close()


@app.command()
def reflect(
    hard_work: str = typer.Option(..., prompt="Did you work hard this week?"),
    on_track: str = typer.Option(..., prompt="Are you on track?"),
    mood: str = typer.Option(..., prompt=f"Mood ({', '.join(MOTIVATION_LEVELS)})"),
    stars: int = typer.Option(..., prompt="Rate your week (0-5 stars)")
):
    """Save the weekly self-reflection for the current week"""
    db = SessionLocal()
    try:
        profile = _load_profile(db)
        reflection = WeeklyReflection(
            hard_work_rating=hard_work,
            on_track_rating=on_track,
            mood_rating=mood,
            star_rating=stars
        )
        week_number = current_week_number(profile.start_date)
        save_reflection(db, profile, week_number, reflection)
        set_motivation(db, profile.id, mood)
        console.print(f"[green]✓[/green] Reflection saved for week {week_number}!")
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid reflection: {e.errors()[0]['msg']}")
    finally:
        db.close()


@app.command()
def progress():
    """View overall progress across all weeks"""
    db = SessionLocal()
    try:
        profile = _load_profile(db)
        data = get_progress(db, profile.id) or refresh_progress(db, profile)

        console.print("\n[bold]Learning Progress[/bold]\n")
        console.print("[cyan]Statistics:[/cyan]")
        console.print(f"  Total practice: {format_minutes(data.total_minutes)} ({data.total_hours} hours)")
        console.print(f"  Average success rate: {data.average_success_rate:.0%}")
        console.print(f"  Motivation: {data.current_motivation}")

        if data.weekly_history:
            table = Table(show_header=True, header_style="bold magenta")
            table.add_column("Week", style="cyan", justify="right")
            table.add_column("Dates", style="yellow")
            table.add_column("Minutes", style="green", justify="right")
            table.add_column("Success", style="blue", justify="right")
            for w in data.weekly_history:
                table.add_row(
                    str(w.week_number),
                    f"{w.date_range.start} → {w.date_range.end}",
                    str(total_for_week(w.daily_practice)),
                    f"{compute_average_success_rate(w.success_rates):.0%}"
                )
            console.print(table)
        else:
            console.print("[dim]No practice recorded yet.[/dim]")
    finally:
        db.close()


if __name__ == "__main__":
    app()
