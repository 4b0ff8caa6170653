"""Interface for the hypervisor's command-line front end."""

from abc import ABC, abstractmethod


class Hypervisor(ABC):
    """Text-level access to the domain registry."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name (e.g. 'virsh')."""
        pass

    @abstractmethod
    def list_domains_output(self, all_domains: bool = True) -> str:
        """Raw domain table; inactive domains are included when ``all_domains``."""
        pass

    @abstractmethod
    def domain_exists(self, name: str) -> bool:
        """Check whether the registry knows the domain."""
        pass

    @abstractmethod
    def rename_domain(self, old_name: str, new_name: str) -> None:
        """Rename a domain in the registry."""
        pass

    @abstractmethod
    def run_lifecycle(self, verb: str, name: str) -> None:
        """Run start/reboot/shutdown/destroy/undefine, output to the terminal."""
        pass

    @abstractmethod
    def block_devices_output(self, name: str) -> str:
        """Raw detailed block device table of a domain."""
        pass

    @abstractmethod
    def node_info(self) -> None:
        """Print host information to the terminal."""
        pass
