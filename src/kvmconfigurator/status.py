"""Map hypervisor run-state text, English or German, to a canonical status."""

from kvmconfigurator.models import RUNNING, SHUT_OFF, CanonicalStatus

RUNNING_SYNONYMS = frozenset({"running", "laufend"})
SHUT_OFF_SYNONYMS = frozenset({"shut", "off", "shutoff", "shut off", "ausgeschaltet"})


def normalize_status(raw: str) -> CanonicalStatus:
    """
    Normalize a raw status token.

    Unrecognized text is returned as an unknown status carrying the input
    unchanged; it is never treated as running.
    """
    token = " ".join((raw or "").split()).lower()
    if token in RUNNING_SYNONYMS:
        return RUNNING
    if token in SHUT_OFF_SYNONYMS:
        return SHUT_OFF
    return CanonicalStatus.unknown(raw)
