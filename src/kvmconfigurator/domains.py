"""Domain discovery: run ``virsh list`` and turn its table into records."""

from typing import List, Optional, Union

from kvmconfigurator.errors import DomainNotFoundError
from kvmconfigurator.interfaces.hypervisor import Hypervisor
from kvmconfigurator.logging import get_logger
from kvmconfigurator.models import DomainRecord
from kvmconfigurator.status import normalize_status
from kvmconfigurator.tabular import DOMAIN_LIST_HEADERS, parse_tabular_output

log = get_logger(__name__)

# States virsh prints as two words; consumed together so they stay out of the name
TWO_WORD_STATES = frozenset({"shut off", "in shutdown"})


def parse_domain_list(raw: Union[str, bytes]) -> List[DomainRecord]:
    """
    Parse ``virsh list`` output.

    The first field is the id, the last field the status and everything in
    between, joined by single spaces, the name.
    """
    records = []
    for fields in parse_tabular_output(raw, min_fields=3, header_prefixes=DOMAIN_LIST_HEADERS):
        tail = f"{fields[-2]} {fields[-1]}".lower()
        if len(fields) >= 4 and tail in TWO_WORD_STATES:
            raw_status = " ".join(fields[-2:])
            name_fields = fields[1:-2]
        else:
            raw_status = fields[-1]
            name_fields = fields[1:-1]

        records.append(
            DomainRecord(
                id=fields[0],
                name=" ".join(name_fields),
                status=normalize_status(raw_status),
            )
        )
    return records


def list_domains(hypervisor: Hypervisor, all_domains: bool = True) -> List[DomainRecord]:
    """List domains in hypervisor order; raises ExternalToolError on failure."""
    records = parse_domain_list(hypervisor.list_domains_output(all_domains=all_domains))
    log.debug("domains.listed", count=len(records), all_domains=all_domains)
    return records


def sort_domains(records: List[DomainRecord]) -> List[DomainRecord]:
    """Case-insensitive alphabetical order, for display."""
    return sorted(records, key=lambda r: r.name.lower())


def find_domain(records: List[DomainRecord], name: str) -> Optional[DomainRecord]:
    for record in records:
        if record.name == name:
            return record
    return None


def get_domain(hypervisor: Hypervisor, name: str) -> DomainRecord:
    """Fresh record for one domain; raises DomainNotFoundError."""
    record = find_domain(list_domains(hypervisor), name)
    if record is None:
        raise DomainNotFoundError(name)
    return record
