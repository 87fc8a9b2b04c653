"""Share text formatting."""

from vibecheck.models.profile import NormalizedProfile

DEFAULT_APP_URL = "https://vibecheck-olive.vercel.app"


def format_percent(score: float) -> str:
    """
    Format a 0-1 score as a percentage with one decimal.

    Examples:
        0.87 -> "87.0%"
        0.1234 -> "12.3%"
    """
    return f"{score * 100:.1f}%"


def format_days(days: int) -> str:
    """
    Format a day count.

    Examples:
        1 -> "1 day"
        5 -> "5 days"
    """
    return f"{days} day" if days == 1 else f"{days} days"


def format_share_text(
    profile: NormalizedProfile,
    streak: int | None = None,
    app_url: str = DEFAULT_APP_URL,
) -> str:
    """
    Build the human-readable summary handed to the sharing collaborator.

    Args:
        profile: Normalized profile to summarize
        streak: Current streak count, omitted from the text if None
        app_url: Link appended to the message

    Returns:
        Multi-line share message
    """
    lines = [
        f"My neynar score is {format_percent(profile.score)} 🔥",
        f"Tier: {profile.tier.value}",
    ]
    if streak is not None:
        lines.append(f"Check-in streak: {format_days(streak)}")
    lines.append("")
    lines.append("Check your neynar score and see where you rank! 👇")
    lines.append(app_url)
    return "\n".join(lines)
