"""Completion progress computation and progress bar markup."""

from ..models import BadgeTier, GameProgress

MASTERED_ICON = "👑"
COMPLETED_ICON = "🎖️"


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def compute_progress(total: int, earned_casual: int, earned_hardcore: int) -> GameProgress:
    """Compute completion percentages and the badge tier.

    ``pct_complete`` and ``pct_hardcore`` truncate while
    ``pct_hardcore_proportion`` rounds half up; displayed percentages have
    always been computed this way.

    Negative unlock counts are treated as zero. Percentages are capped at 100
    and a non-positive total yields no progress at all.

    Args:
        total: Number of achievements in the set
        earned_casual: Achievements unlocked in casual mode only
        earned_hardcore: Achievements unlocked in hardcore mode

    Returns:
        GameProgress for the player
    """
    casual = max(earned_casual, 0)
    hardcore = max(earned_hardcore, 0)

    if total <= 0:
        return GameProgress(
            pct_complete=0,
            pct_hardcore=0,
            pct_hardcore_proportion=0,
            badge_tier=BadgeTier.NONE,
        )

    earned = casual + hardcore
    pct_complete = min(100 * earned // total, 100)
    pct_hardcore = min(100 * hardcore // total, 100)
    pct_hardcore_proportion = _round_half_up(100 * hardcore, earned) if earned > 0 else 0

    if earned >= total:
        tier = BadgeTier.MASTERED if pct_hardcore_proportion == 100 else BadgeTier.COMPLETED
    else:
        tier = BadgeTier.NONE

    return GameProgress(
        pct_complete=pct_complete,
        pct_hardcore=pct_hardcore,
        pct_hardcore_proportion=pct_hardcore_proportion,
        badge_tier=tier,
        has_casual_and_hardcore=casual > 0 and hardcore > 0,
    )


def render_completion_icon(tier: BadgeTier, tooltip: bool = False) -> str:
    """Render the award icon next to a progress bar."""
    if tier is BadgeTier.NONE:
        return "<div class='completion-icon'></div>"

    if tier is BadgeTier.MASTERED:
        icon, css_class, tooltip_text = MASTERED_ICON, "mastered", "Mastered (hardcore)"
    else:
        icon, css_class, tooltip_text = COMPLETED_ICON, "completed", "Completed"

    css_class = f"completion-icon {css_class}"
    if tooltip:
        css_class += " tooltip"
    else:
        tooltip_text = ""

    return f"<div class='{css_class}' title='{tooltip_text}'>{icon}</div>"


def render_game_progress(total: int, earned_casual: int, earned_hardcore: int) -> str:
    """Render a player's progress bar with its label and award icon."""
    progress = compute_progress(total, earned_casual, earned_hardcore)

    return (
        "<div class='w-40 my-2'>"
        "<div class='flex w-full items-center'>"
        "<div class='progressbar grow'>"
        f"<div class='completion' style='width:{progress.pct_complete}%' title='{progress.title_hint}'>"
        f"<div class='completion-hardcore' style='width:{progress.pct_hardcore_proportion}%'></div>"
        "</div>"
        "</div>"
        f"{render_completion_icon(progress.badge_tier)}"
        "</div>"
        f"<div class='progressbar-label pr-5 -mt-1'>{progress.label}</div>"
        "</div>"
    )
