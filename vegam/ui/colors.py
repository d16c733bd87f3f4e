"""Theme colors for the UI."""


class RoundColors:
    """Light teal palette shared by the panels and the passage overlay."""

    BG_MAIN = "#EEF6F6"
    CARD_BG = "rgba(255, 255, 255, 0.85)"
    CARD_BORDER = "rgba(15, 23, 42, 0.10)"

    PRIMARY = "#00838f"
    PRIMARY_LIGHT = "#4fb3bf"
    PRIMARY_DARK = "#005662"

    TEXT_PRIMARY = "#1F2933"
    TEXT_MUTED = "#64748B"

    # passage overlay spans
    CORRECT = "#2F855A"
    INCORRECT = "#D64545"
    INCORRECT_BG = "rgba(214, 69, 69, 0.18)"
    PENDING = "#64748B"


STATUS_COLORS = {
    "Waiting": RoundColors.TEXT_MUTED,
    "Running": RoundColors.PRIMARY,
    "Completed": RoundColors.CORRECT,
    "Time Up": RoundColors.INCORRECT,
    "Stopped": RoundColors.TEXT_MUTED,
}


def status_color(label: str) -> str:
    """Color for a status label; unknown labels use the muted text color."""
    return STATUS_COLORS.get(label, RoundColors.TEXT_MUTED)
