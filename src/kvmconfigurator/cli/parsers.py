#!/usr/bin/env python3
"""
Argument parsers for the KVM Configurator CLI.
"""

import argparse
import json
from pathlib import Path
from typing import List, Optional

from rich.markup import escape

from kvmconfigurator import __version__
from kvmconfigurator.actions import ACTION_RULES, eligible_actions, run_action, select_action
from kvmconfigurator.app import Toolbox
from kvmconfigurator.cli.interactive import interactive_mode
from kvmconfigurator.cli.utils import confirm, console, domain_table, print_error, print_report
from kvmconfigurator.config import load_config
from kvmconfigurator.domains import get_domain, list_domains, sort_domains
from kvmconfigurator.errors import ExternalToolNotFound, InvalidInputError, KvmConfiguratorError
from kvmconfigurator.logging import LOG_LEVELS, configure_logging, get_logger
from kvmconfigurator.models import DISK_FORMATS, Action
from kvmconfigurator.prereq import ensure_all

log = get_logger(__name__)

LABELS = {rule.action: rule.label for rule in ACTION_RULES}


def _require_eligible(toolbox: Toolbox, action: Action, vm_name: str) -> None:
    record = get_domain(toolbox.hypervisor, vm_name)
    if select_action(eligible_actions(record.status), action) is None:
        raise InvalidInputError(f"{LABELS[action]} is not allowed while VM {vm_name!r} is {record.status}")


def cmd_interactive(args, toolbox: Toolbox) -> int:
    ensure_all(args.config_obj.tools.virsh, args.config_obj.tools.qemu_img)
    interactive_mode(toolbox)
    return 0


def cmd_list(args, toolbox: Toolbox) -> int:
    records = sort_domains(list_domains(toolbox.hypervisor, all_domains=not args.running))
    if args.json:
        print(json.dumps([record.to_dict() for record in records], indent=2))
        return 0
    if not records:
        console.print("[dim]No VMs found[/]")
        return 0
    console.print(domain_table(records))
    return 0


def cmd_lifecycle(args, toolbox: Toolbox) -> int:
    action = Action(args.command)
    _require_eligible(toolbox, action, args.name)
    run_action(toolbox.hypervisor, action, args.name)
    console.print(f"[green]✅ {LABELS[action]} of {escape(args.name)} completed[/]")
    return 0


def cmd_undefine(args, toolbox: Toolbox) -> int:
    _require_eligible(toolbox, Action.UNDEFINE, args.name)
    ask = (lambda question: True) if args.yes else confirm
    print_report(toolbox.deleter.delete_with_disks(args.name, ask))
    return 0


def cmd_rename(args, toolbox: Toolbox) -> int:
    print_report(toolbox.renamer.rename(args.name, lambda old_name: args.new_name))
    return 0


def cmd_disk_resize(args, toolbox: Toolbox) -> int:
    print_report(toolbox.disk_operations.resize(args.name, args.gib))
    return 0


def cmd_disk_convert(args, toolbox: Toolbox) -> int:
    print_report(toolbox.disk_operations.convert(args.name, args.format))
    return 0


def cmd_disk_repair(args, toolbox: Toolbox) -> int:
    print_report(toolbox.disk_operations.repair(args.name))
    return 0


def cmd_nodeinfo(args, toolbox: Toolbox) -> int:
    toolbox.hypervisor.node_info()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kvm-configurator", description="Manage KVM/libvirt guests through virsh and qemu-img"
    )
    parser.add_argument("--version", action="version", version=f"kvm-configurator {__version__}")
    parser.add_argument("--config", "-c", type=Path, help="Path to oslist.yaml")
    parser.add_argument("--xml-dir", help="Directory of saved XML definitions")
    parser.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, help="Log level"
    )
    parser.add_argument("--json-logs", action="store_true", help="Log JSON lines to stderr")
    parser.add_argument("--log-file", type=Path, help="Also write JSON logs to this file")

    # Interactive mode (default)
    parser.set_defaults(func=cmd_interactive)

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    list_parser = subparsers.add_parser("list", help="List VMs")
    list_parser.add_argument("--running", action="store_true", help="Only running VMs")
    list_parser.add_argument("--json", action="store_true", help="Print the list as JSON")
    list_parser.set_defaults(func=cmd_list)

    for action in (Action.START, Action.REBOOT, Action.SHUTDOWN, Action.FORCE_STOP):
        action_parser = subparsers.add_parser(action.value, help=f"{LABELS[action]} a VM")
        action_parser.add_argument("name", help="VM name")
        action_parser.set_defaults(func=cmd_lifecycle)

    undefine_parser = subparsers.add_parser("undefine", help="Undefine a VM and delete its disks")
    undefine_parser.add_argument("name", help="VM name")
    undefine_parser.add_argument("--yes", "-y", action="store_true", help="Delete disks without asking")
    undefine_parser.set_defaults(func=cmd_undefine)

    rename_parser = subparsers.add_parser("rename", help="Rename a VM, its XML file and system disk")
    rename_parser.add_argument("name", help="Current VM name")
    rename_parser.add_argument("new_name", help="New VM name")
    rename_parser.set_defaults(func=cmd_rename)

    disk_parser = subparsers.add_parser("disk", help="Disk operations on the system disk")
    disk_subparsers = disk_parser.add_subparsers(dest="disk_command", required=True)

    resize_parser = disk_subparsers.add_parser("resize", help="Grow the disk")
    resize_parser.add_argument("name", help="VM name")
    resize_parser.add_argument("gib", type=int, help="GiB to add")
    resize_parser.set_defaults(func=cmd_disk_resize)

    convert_parser = disk_subparsers.add_parser("convert", help="Convert the disk format")
    convert_parser.add_argument("name", help="VM name")
    convert_parser.add_argument("format", choices=DISK_FORMATS, help="Target format")
    convert_parser.set_defaults(func=cmd_disk_convert)

    repair_parser = disk_subparsers.add_parser("repair", help="Check and repair the disk")
    repair_parser.add_argument("name", help="VM name")
    repair_parser.set_defaults(func=cmd_disk_repair)

    nodeinfo_parser = subparsers.add_parser("nodeinfo", help="Show host information")
    nodeinfo_parser.set_defaults(func=cmd_nodeinfo)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, xml_dir=args.xml_dir)
    except (OSError, KvmConfiguratorError) as e:
        console.print(f"[red]❌ Error loading config: {escape(str(e))}[/]", highlight=False)
        return 1

    configure_logging(
        level=args.log_level or config.logging.level,
        json_output=args.json_logs or config.logging.json_output,
        log_file=args.log_file or (Path(config.logging.log_file) if config.logging.log_file else None),
    )
    log.debug("config.loaded", source=config.source, xml_dir=str(config.xml_dir))

    args.config_obj = config
    toolbox = Toolbox.from_config(config, console=console)

    try:
        return args.func(args, toolbox)
    except ExternalToolNotFound as e:
        console.print(f"[red]❌ Error: {escape(e.tool)} is not installed or not in the PATH.[/]", highlight=False)
        console.print(f"Please install {escape(e.tool)} with your package manager.")
        return 1
    except KvmConfiguratorError as e:
        print_error(e)
        return 1
    except KeyboardInterrupt:
        console.print("\n[dim]Aborted[/]")
        return 130
