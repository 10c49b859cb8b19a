# ABOUTME: Provides a CLI over the scorer, batch evaluator, trends, planner, and gamification.
# ABOUTME: Reads CSV/YAML inputs, runs the pure engine, and renders results with rich.

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import typer
import yaml
from rich.console import Console
from rich.table import Table

from src.analytics.charts import export_class_chart, export_student_chart
from src.analytics.trends import class_trend, student_trend
from src.common.config import load_config, make_rng
from src.common.schemas import NamedStudentMetric, StudentMetric, WeeklyObservation
from src.gamification.engine import GamificationEngine
from src.gamification.leaderboard import build_leaderboard
from src.gamification.profile import StudySessionRequest, profile_from_dict, profile_to_dict
from src.gamification.templates import default_registry, load_registry
from src.planner.study_plan import StudyPlanRequest, generate_study_plan, success_tips
from src.predictor.batch import batch_score, performance_breakdown
from src.predictor.scorer import score

console = Console()
app = typer.Typer(help="Score students, analyse trends, plan study time, and track rewards.")

DEFAULT_CONFIG = Path("configs/engine.yaml")
DEFAULT_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


def _config(path: Optional[Path]) -> Dict:
    if path is None:
        path = DEFAULT_CONFIG if DEFAULT_CONFIG.exists() else None
    elif not path.exists():
        raise typer.BadParameter(f"Config not found: {path}", param_hint="--config")
    try:
        return load_config(path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def _seed(seed: Optional[int], cfg: Dict) -> Optional[int]:
    return seed if seed is not None else cfg.get("seed")


def _histories(path: Path) -> Dict[str, List[WeeklyObservation]]:
    try:
        return load_histories(path)
    except (ValueError, TypeError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--histories") from exc


def load_histories(path: Path) -> Dict[str, List[WeeklyObservation]]:
    """Read `students: {name: [[hours, attendance], ...]}` into ordered observations."""
    with open(path, encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    students = cfg.get("students")
    if not isinstance(students, dict):
        raise ValueError(f"{path} must define a 'students' mapping.")
    histories: Dict[str, List[WeeklyObservation]] = {}
    for name, weeks in students.items():
        histories[str(name)] = [
            WeeklyObservation(week=index + 1, hours=float(hours), attendance=float(attendance))
            for index, (hours, attendance) in enumerate(weeks or [])
        ]
    return histories


def load_batch_csv(path: Path) -> List[NamedStudentMetric]:
    df = pd.read_csv(path)
    missing = {"name", "hours", "attendance"} - set(df.columns)
    if missing:
        raise ValueError(f"Missing required column(s) in {path}: {', '.join(sorted(missing))}")
    df = df.dropna(subset=["name", "hours", "attendance"])
    return [
        NamedStudentMetric(name=str(row["name"]), hours=float(row["hours"]), attendance=float(row["attendance"]))
        for _, row in df.iterrows()
    ]


@app.command()
def predict(
    hours: float = typer.Option(..., "--hours", help="Weekly study hours."),
    attendance: float = typer.Option(..., "--attendance", help="Class attendance percentage."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the noise term."),
    config: Optional[Path] = typer.Option(None, "--config", help="Engine config YAML (default: configs/engine.yaml if present)."),
) -> None:
    """Predict pass/fail for a single student."""
    cfg = _config(config)
    result = score(StudentMetric(hours=hours, attendance=attendance), rng=make_rng(_seed(seed, cfg)))
    color = "green" if result.passed else "red"
    console.print(f"[bold {color}]Prediction: {result.label}[/bold {color}]")
    console.print(f"[bold]Confidence:[/] {result.confidence * 100:.1f}%")
    console.print(f"Student with {hours} study hours and {attendance}% attendance is predicted to: {result.label}")


@app.command()
def batch(
    csv_path: Path = typer.Option(..., "--csv", exists=True, dir_okay=False, help="CSV with name,hours,attendance."),
    output: Optional[Path] = typer.Option(None, "--output", help="Optional CSV path for predictions."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the noise term."),
    config: Optional[Path] = typer.Option(None, "--config", help="Engine config YAML (default: configs/engine.yaml if present)."),
) -> None:
    """Score every student in a CSV file."""
    cfg = _config(config)
    try:
        metrics = load_batch_csv(csv_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--csv") from exc
    typer.echo(f"[batch] Scoring {len(metrics)} students from {csv_path}")

    result = batch_score(metrics, rng=make_rng(_seed(seed, cfg)))
    summary = result.summary

    table = Table(show_header=True, header_style="bold magenta")
    for column in ("Student", "Hours", "Attendance", "Prediction", "Confidence", "Recommendation"):
        table.add_column(column)
    for p in result.predictions:
        color = "green" if p.passed else "red"
        table.add_row(
            p.name,
            f"{p.hours:g}",
            f"{p.attendance:g}%",
            f"[{color}]{p.label}[/{color}]",
            f"{p.confidence * 100:.1f}%",
            p.recommendation.value,
        )
    console.print(table)
    console.print(
        f"[bold]Pass rate:[/] {summary.pass_rate * 100:.1f}%  "
        f"[bold]Pass:[/] {summary.pass_count}  [bold]Fail:[/] {summary.fail_count}  "
        f"[bold]Avg confidence:[/] {summary.avg_confidence * 100:.1f}%"
    )
    for tier in performance_breakdown(result.predictions):
        console.print(f"  {tier.tier.value}: {tier.count} students | Pass Rate: {tier.pass_rate * 100:.1f}%")

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        result.to_frame().to_csv(output, index=False)
        typer.echo(f"[batch] Wrote {len(result.predictions)} predictions to {output}")


@app.command()
def trend(
    student: str = typer.Option(..., "--student", help="Student name in the histories file."),
    histories_path: Path = typer.Option(Path("configs/sample_class.yaml"), "--histories", exists=True, help="YAML histories."),
    chart_out: Optional[Path] = typer.Option(None, "--chart-out", help="Optional JSON path for chart data."),
) -> None:
    """Show a single student's weekly trend."""
    histories = _histories(histories_path)
    if student not in histories:
        console.print(f"[red]No history for {student} in {histories_path}[/red]")
        raise typer.Exit(code=1)

    report = student_trend(student, histories[student])
    table = Table(show_header=True, header_style="bold magenta")
    for column in ("Week", "Hours", "Attendance", "Pass", "Confidence"):
        table.add_column(column)
    for week in report.weekly_data:
        table.add_row(
            str(week.week), f"{week.study_hours:g}", f"{week.attendance:g}%", "yes" if week.predicted_pass else "no",
            f"{week.confidence:.2f}",
        )
    console.print(table)
    console.print(f"[bold]Trend:[/] {report.overall_trend.value}  [bold]Improvement score:[/] {report.improvement_score:.2f}")

    if chart_out is not None:
        _write_json(chart_out, export_student_chart(report))


@app.command("class-trends")
def class_trends(
    histories_path: Path = typer.Option(Path("configs/sample_class.yaml"), "--histories", exists=True, help="YAML histories."),
    chart_out: Optional[Path] = typer.Option(None, "--chart-out", help="Optional JSON path for chart data."),
) -> None:
    """Summarise a class over the four-week horizon."""
    histories = _histories(histories_path)
    typer.echo(f"[trends] Aggregating {len(histories)} students")
    report = class_trend(histories)

    table = Table(show_header=True, header_style="bold magenta")
    for column in ("Week", "Avg Hours", "Avg Attendance", "Pass Rate", "Observations"):
        table.add_column(column)
    for s in report.weekly_summary:
        table.add_row(
            str(s.week), f"{s.avg_study_hours:.2f}", f"{s.avg_attendance:.1f}%", f"{s.pass_rate * 100:.0f}%",
            str(s.total_predictions),
        )
    console.print(table)
    console.print(f"[bold green]Top performers:[/] {', '.join(report.top_performers) or '-'}")
    console.print(f"[bold red]At risk:[/] {', '.join(report.at_risk_students) or '-'}")
    console.print(f"[bold]Average improvement:[/] {report.average_improvement:.2f}")

    if chart_out is not None:
        _write_json(chart_out, export_class_chart(report))


@app.command()
def plan(
    student: str = typer.Option(..., "--student", help="Student name."),
    hours: float = typer.Option(..., "--hours", help="Current weekly study hours."),
    attendance: float = typer.Option(..., "--attendance", help="Current attendance percentage."),
    grade: str = typer.Option("B", "--grade", help="Target grade: A, B, C, or Pass."),
    days: Optional[List[str]] = typer.Option(None, "--day", help="Available day; repeat for several."),
    times: Optional[List[str]] = typer.Option(None, "--time", help="Preferred time slot; repeat for several."),
    subjects: Optional[List[str]] = typer.Option(None, "--subject", help="Subject to schedule; repeat for several."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for schedule synthesis."),
    config: Optional[Path] = typer.Option(None, "--config", help="Engine config YAML (default: configs/engine.yaml if present)."),
) -> None:
    """Generate a study plan toward a target grade."""
    cfg = _config(config)
    request = StudyPlanRequest(
        student_name=student,
        current_hours=hours,
        current_attendance=attendance,
        target_grade=grade,
        available_days=tuple(days or DEFAULT_DAYS),
        preferred_times=tuple(times or ()),
        subjects=tuple(subjects or ()),
    )
    study_plan = generate_study_plan(request, rng=make_rng(_seed(seed, cfg)))

    console.rule(f"[bold blue]Study plan for {student} (grade {grade})[/bold blue]")
    console.print(f"[bold]Weekly hours:[/] {study_plan.recommended_hours:g}  "
                  f"[bold]Attendance:[/] {study_plan.target_attendance:g}%  "
                  f"[bold]Duration:[/] {study_plan.plan_duration_weeks} weeks")

    table = Table(show_header=True, header_style="bold magenta")
    for column in ("Day", "Time", "Subject", "Activity", "Hours"):
        table.add_column(column)
    for day in study_plan.weekly_schedule:
        for block in day.blocks:
            table.add_row(day.day, block.time_slot, block.subject, block.activity, f"{block.duration_hours:.2f}")
    console.print(table)

    for rec in study_plan.recommendations:
        console.print(f"  • {rec}")
    console.print()
    console.print(study_plan.expected_outcome)


@app.command("record-session")
def record_session(
    student: str = typer.Option(..., "--student", help="Student name."),
    hours: float = typer.Option(..., "--hours", help="Session duration in hours."),
    focus: float = typer.Option(0.5, "--focus", help="Focus score between 0 and 1."),
    subjects: Optional[List[str]] = typer.Option(None, "--subject", help="Subject studied; repeat for several."),
    attended: bool = typer.Option(False, "--attended/--not-attended", help="Attended class today."),
    profile_path: Optional[Path] = typer.Option(None, "--profile", help="Existing profile YAML."),
    output: Optional[Path] = typer.Option(None, "--output", help="Where to write the updated profile YAML."),
    config: Optional[Path] = typer.Option(None, "--config", help="Engine config YAML (default: configs/engine.yaml if present)."),
) -> None:
    """Record a study session and print the rewards it earns."""
    cfg = _config(config)
    templates_path = cfg.get("templates_path")
    try:
        registry = load_registry(Path(templates_path)) if templates_path else default_registry()
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    profile = None
    if profile_path is not None:
        if not profile_path.exists():
            console.print(f"[red]Missing profile at {profile_path}[/red]")
            raise typer.Exit(code=1)
        with open(profile_path, encoding="utf-8") as f:
            profile = profile_from_dict(yaml.safe_load(f))

    engine = GamificationEngine(registry)
    session = StudySessionRequest(
        student_name=student,
        duration_hours=hours,
        subjects=tuple(subjects or ()),
        focus_score=focus,
        attended_today=attended,
        timestamp=datetime.now().astimezone(),
    )
    outcome = engine.record_session(profile, session)
    updated = outcome.updated_profile

    console.print(f"[bold green]+{outcome.points_earned} points[/bold green] (bonus {outcome.bonus_points})")
    console.print(f"[bold]Total:[/] {updated.total_points}  [bold]Level:[/] {updated.level}"
                  f"{'  [yellow]LEVEL UP![/yellow]' if outcome.level_up else ''}")
    console.print(f"[bold]Streak:[/] {updated.current_streak} (best {updated.longest_streak})")
    for badge in outcome.new_badges:
        console.print(f"  {badge.icon} [bold]{badge.name}[/] ({badge.rarity.value}) - {badge.description}")
    for achievement in outcome.new_achievements:
        console.print(f"  🏅 [bold]{achievement.name}[/] +{achievement.points} - {achievement.description}")

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(yaml.safe_dump(profile_to_dict(updated), allow_unicode=True, sort_keys=False), encoding="utf-8")
        typer.echo(f"[gamification] Wrote profile for {student} to {output}")


@app.command()
def leaderboard(
    profiles: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Profile YAML files."),
    limit: int = typer.Option(10, "--limit", help="Number of entries to show."),
) -> None:
    """Rank saved profiles by total points."""
    loaded = []
    for path in profiles:
        with open(path, encoding="utf-8") as f:
            loaded.append(profile_from_dict(yaml.safe_load(f)))

    table = Table(show_header=True, header_style="bold magenta")
    for column in ("Rank", "Student", "Points", "Level", "Badges"):
        table.add_column(column)
    for entry in build_leaderboard(loaded, limit=limit):
        table.add_row(str(entry.rank), entry.student_name, str(entry.total_points), str(entry.level), str(entry.badge_count))
    console.print(table)


@app.command()
def tips() -> None:
    """Print general study success tips."""
    console.print("[bold]Evidence-Based Study Recommendations:[/bold]")
    for tip in success_tips():
        console.print(f"  {tip}")


def _write_json(path: Path, payload: Dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    typer.echo(f"[charts] Wrote chart data to {path}")


if __name__ == "__main__":
    app()
