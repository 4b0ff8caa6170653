"""
Action gate: which lifecycle actions a domain's state allows.

The eligibility rules are data. ``ACTION_RULES`` is built once, in menu
order, and never mutated.
"""

from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple, Union

from kvmconfigurator.errors import InvalidInputError
from kvmconfigurator.interfaces.hypervisor import Hypervisor
from kvmconfigurator.logging import get_logger
from kvmconfigurator.models import Action, CanonicalStatus

log = get_logger(__name__)


@dataclass(frozen=True)
class ActionRule:
    action: Action
    key: str
    label: str
    allowed: Callable[[CanonicalStatus], bool]


ACTION_RULES: Tuple[ActionRule, ...] = (
    ActionRule(Action.START, "1", "Start", lambda s: not s.is_running),
    ActionRule(Action.REBOOT, "2", "Restart", lambda s: s.is_running),
    ActionRule(Action.SHUTDOWN, "3", "Shutdown", lambda s: s.is_running),
    ActionRule(Action.FORCE_STOP, "4", "Force-Shutdown", lambda s: s.is_running),
    ActionRule(Action.DISK_OPS, "5", "Disk-Operations", lambda s: True),
    ActionRule(Action.RENAME, "6", "Rename VM", lambda s: True),
    ActionRule(Action.UNDEFINE, "0", "Undefine", lambda s: s.is_shut_off),
)

# Actions that map one-to-one onto a virsh verb
LIFECYCLE_ACTIONS = frozenset({Action.START, Action.REBOOT, Action.SHUTDOWN, Action.FORCE_STOP, Action.UNDEFINE})


def eligible_rules(status: CanonicalStatus) -> List[ActionRule]:
    """Rules allowed for ``status``, in menu order."""
    return [rule for rule in ACTION_RULES if rule.allowed(status)]


def eligible_actions(status: CanonicalStatus) -> FrozenSet[Action]:
    return frozenset(rule.action for rule in eligible_rules(status))


def select_action(
    eligible: Iterable[Action],
    choice: Union[str, Action, None],
) -> Optional[Action]:
    """
    Map operator input (menu key, verb or Action) to an eligible action.

    Returns None for anything unrecognized or not allowed.
    """
    allowed = frozenset(eligible)
    if isinstance(choice, Action):
        return choice if choice in allowed else None
    if choice is None:
        return None

    choice = choice.strip().lower()
    for rule in ACTION_RULES:
        if choice in (rule.key, rule.action.value) and rule.action in allowed:
            return rule.action
    return None


def run_action(hypervisor: Hypervisor, action: Action, domain_name: str) -> None:
    """Execute a plain lifecycle action; raises ExternalToolError on failure."""
    if action not in LIFECYCLE_ACTIONS:
        raise InvalidInputError(f"{action.value} is not a lifecycle action")
    log.info("action.run", action=action.value, vm_name=domain_name)
    hypervisor.run_lifecycle(action.value, domain_name)
