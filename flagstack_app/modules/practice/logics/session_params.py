"""Parsing of client-supplied session parameters into closed value sets."""

from flagstack_app.core.error_handlers import ValidationError
from flagstack_app.models.enums import PracticeMode
from ..config import PracticeConfig
from ..schemas import SessionLength


def parse_mode(raw) -> PracticeMode:
    if isinstance(raw, PracticeMode):
        return raw
    try:
        return PracticeMode(raw)
    except ValueError:
        raise ValidationError(
            'Invalid practice mode',
            errors={'mode': raw, 'allowed': [m.value for m in PracticeMode]},
        )


def parse_session_length(raw) -> SessionLength:
    """A positive integer or ``"all"``. Lengths above the catalog size are clamped later."""
    if raw == PracticeConfig.ALL_FLAGS:
        return PracticeConfig.ALL_FLAGS
    # bool is an int subclass; True must not pass as a length
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 1:
        return raw
    raise ValidationError(
        'Session length must be a positive integer or "all"',
        errors={
            'length': raw,
            'presets': list(PracticeConfig.SESSION_LENGTHS) + [PracticeConfig.ALL_FLAGS],
        },
    )


def parse_seed(raw):
    if raw is None:
        return None
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    raise ValidationError('Seed must be an integer', errors={'seed': raw})
