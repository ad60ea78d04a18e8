from .clock import PlaybackClock, parse_jump_input
from .session import CookingSession
from .ticker import TimerTicker
from .timer_bank import TIMER_MODES, Timer, TimerBank, TimerDisplayState, TimerMode, TimerPhase

__all__ = [
    "CookingSession",
    "PlaybackClock",
    "TIMER_MODES",
    "Timer",
    "TimerBank",
    "TimerDisplayState",
    "TimerMode",
    "TimerPhase",
    "TimerTicker",
    "parse_jump_input",
]
