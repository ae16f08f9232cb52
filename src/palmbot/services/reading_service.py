from palmbot.models.palm_result import LEFT, RIGHT

BASIC_READINGS = {
    LEFT: "The left hand shows your nature and inborn fortune. Inner strength and creativity are at your roots.",
    RIGHT: "The right hand shows your future and the fortune you build. Your drive and follow-through are about to grow.",
}

DEFAULT_READING = "Good energy from your palm. Keep moving forward and luck will be on your side."


def basic_reading(label: str) -> str:
    """Fixed short reading for a hand label, with a generic reading for anything else."""
    return BASIC_READINGS.get(str(label or "").lower(), DEFAULT_READING)
