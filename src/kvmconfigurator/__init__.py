"""
KVM Configurator - manage libvirt guests from the terminal.

Lists domains, offers only the lifecycle actions their state allows, and
keeps the hypervisor registry, the saved XML definition and the disk image
in step when a domain is renamed, undefined or has its disk reworked.
"""

__version__ = "0.9.0"
__author__ = "KVM Configurator Team"

from kvmconfigurator.actions import eligible_actions, select_action
from kvmconfigurator.domains import list_domains
from kvmconfigurator.status import normalize_status

__all__ = ["eligible_actions", "list_domains", "normalize_status", "select_action", "__version__"]
