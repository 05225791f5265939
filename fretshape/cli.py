"""fretshape CLI entry point."""

import sys

import click

from fretshape import __version__
from fretshape.fretboard import STANDARD_TUNING, StringSetMismatchError, Tuning, get_string_sets
from fretshape.generator import ChordShape, ShapeGenerator
from fretshape.intervals import Interval, LabelOverride, label_for, make_finger_options, parse_interval
from fretshape.voicings import VOICINGS, allowed_voicings


def _parse_tuning(ctx: click.Context, param: click.Parameter, value: str | None) -> Tuning:
    """Turn ``"0,5,5,5,4,5"`` into a tuning tuple."""
    if value is None:
        return STANDARD_TUNING
    try:
        tuning = tuple(int(part) for part in value.split(",") if part.strip())
    except ValueError:
        raise click.BadParameter("use comma-separated semitone gaps, e.g. 0,5,5,5,4,5") from None
    if not tuning:
        raise click.BadParameter("the tuning needs at least one string")
    return tuning


def _parse_intervals(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> list[Interval]:
    intervals: list[Interval] = []
    for value in values:
        try:
            intervals.append(parse_interval(value))
        except ValueError as exc:
            raise click.BadParameter(str(exc)) from None
    return intervals


def _parse_labels(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[int, str]:
    """Turn ``("3=M3", "root=")`` into ``{4: "M3", 0: ""}``."""
    labels: dict[int, str] = {}
    for value in values:
        interval_text, sep, text = value.partition("=")
        if not sep:
            raise click.BadParameter(f"'{value}' is not INTERVAL=TEXT")
        try:
            labels[parse_interval(interval_text)] = text.strip()
        except ValueError as exc:
            raise click.BadParameter(str(exc)) from None
    return labels


def _parse_mask(text: str, tuning: Tuning) -> list[bool]:
    if len(text) != len(tuning) or set(text) - {"0", "1"}:
        raise click.BadParameter(
            f"use {len(tuning)} characters of 0/1, lowest string first (e.g. {'1' * 3 + '0' * (len(tuning) - 3)})",
            param_hint="'--strings'",
        )
    return [char == "1" for char in text]


def _format_mask(mask: list[bool]) -> str:
    glyphs = "".join("●" if sounded else "○" for sounded in mask)
    bits = "".join("1" if sounded else "0" for sounded in mask)
    return f"{glyphs}  {bits}"


def _format_shape(shape: ChordShape) -> str:
    entries = []
    for position in shape.positions:
        text = position.options.text if position.options and position.options.text else ""
        suffix = f"({text})" if text else ""
        entries.append(f"{position.string}:{position.fret}{suffix}")
    flag = "doable" if shape.doable else "stretch"
    return f"  {shape.index + 1:>2}. {'  '.join(entries):<40}  span {shape.fret_span:<2}  {flag}"


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fretshape")
def main() -> None:
    """fretshape: chord voicings and fingerings for fretted instruments."""


# ── shapes subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("intervals", nargs=-1, required=True, callback=_parse_intervals)
@click.option(
    "--voicing",
    "-v",
    type=click.Choice(list(VOICINGS), case_sensitive=False),
    default=ShapeGenerator.DEFAULT_VOICING,
    show_default=True,
    help="Voicing applied to every inversion.",
)
@click.option(
    "--strings",
    "-s",
    default=None,
    metavar="MASK",
    help="Strings to play as 0/1 flags, lowest string first (e.g. 111000). "
    "Defaults to every string set that fits.",
)
@click.option(
    "--tuning",
    default=None,
    callback=_parse_tuning,
    metavar="GAPS",
    help="Semitone gaps between adjacent open strings, low to high.  [default: 0,5,5,5,4,5]",
)
@click.option("--doable-only", is_flag=True, help="Hide shapes that are hard to finger.")
@click.option("--all-strings", is_flag=True, help="Show muted strings as 'x' entries.")
@click.option(
    "--label",
    "labels",
    multiple=True,
    callback=_parse_labels,
    metavar="INTERVAL=TEXT",
    help="Replace an interval's marker text (repeatable). An empty TEXT clears it.",
)
@click.option("--color", is_flag=True, help="Attach each interval's default color.")
def shapes(
    intervals: list[Interval],
    voicing: str,
    strings: str | None,
    tuning: Tuning,
    doable_only: bool,
    all_strings: bool,
    labels: dict[int, str],
    color: bool,
) -> None:
    """
    Print every inversion of a chord as fretted shapes.

    INTERVALS are degree spellings (1 b3 5 b7, #11, bvii) or names
    (major_third, sharp_eleventh).

    \b
    Examples:
      fretshape shapes 1 3 5 --strings 111000
      fretshape shapes 1 3 5 7 --voicing drop_2 --doable-only
      fretshape shapes 1 b3 5 --label 1=R --label b3=m3 --all-strings
    """
    distinct = sorted(set(intervals))
    if len(distinct) > len(tuning):
        click.echo(
            f"  ERROR: {len(distinct)} intervals do not fit on {len(tuning)} strings.",
            err=True,
        )
        sys.exit(1)

    overrides = {
        interval: LabelOverride(text=labels.get(interval), colored=color)
        for interval in set(distinct) | set(labels)
    }
    generator = ShapeGenerator(
        voicing=voicing,
        tuning=tuning,
        doable_only=doable_only,
        include_muted=all_strings,
        finger_options=make_finger_options(overrides),
    )

    names = ", ".join(label_for(interval).full for interval in distinct)
    click.echo(f"fretshape v{__version__}")
    click.echo(f"  Intervals : {names}")
    click.echo(f"  Voicing   : {voicing.upper()}")
    click.echo()

    if len(distinct) >= 2 and voicing.upper() not in allowed_voicings(len(distinct)):
        click.echo(
            f"  WARNING: {voicing.upper()} is not a distinct voicing for {len(distinct)} notes.",
            err=True,
        )

    if strings is not None:
        string_sets = [_parse_mask(strings, tuning)]
    else:
        string_sets = list(get_string_sets(len(distinct), tuning))

    total = 0
    for string_set in string_sets:
        try:
            found = generator.generate(distinct, string_set)
        except StringSetMismatchError as exc:
            click.echo(f"  ERROR: {exc}", err=True)
            sys.exit(1)
        click.echo(_format_mask(string_set))
        if not found:
            click.echo("   (no playable shapes)")
        for shape in found:
            click.echo(_format_shape(shape))
        total += len(found)

    click.echo()
    click.echo(f"Done!  {total} shape{'s' if total != 1 else ''} on {len(string_sets)} string set(s).")


# ── string-sets subcommand ─────────────────────────────────────────────────────

@main.command("string-sets")
@click.argument("count", type=click.IntRange(0, None))
@click.option(
    "--tuning",
    default=None,
    callback=_parse_tuning,
    metavar="GAPS",
    help="Semitone gaps between adjacent open strings, low to high.  [default: 0,5,5,5,4,5]",
)
def string_sets(count: int, tuning: Tuning) -> None:
    """List every way to sound COUNT strings, lowest string first."""
    found = 0
    for mask in get_string_sets(count, tuning):
        click.echo(_format_mask(mask))
        found += 1
    if found == 0:
        click.echo(f"  WARNING: cannot sound {count} of {len(tuning)} strings.", err=True)


# ── voicings subcommand ────────────────────────────────────────────────────────

@main.command()
@click.argument("count", type=click.IntRange(0, None))
def voicings(count: int) -> None:
    """List the voicings that are distinct for COUNT notes."""
    names = allowed_voicings(count)
    if not names:
        click.echo("  WARNING: voicings need at least two notes.", err=True)
        return
    for name in names:
        click.echo(name)
