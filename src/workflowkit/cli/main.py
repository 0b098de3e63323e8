#!/usr/bin/env python3
"""Entry point for the wfkit CLI."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections import deque
from textwrap import dedent

from workflowkit import __version__
from workflowkit.app.workflow import Workflow
from workflowkit.settings import SETTINGS, truthy
from workflowkit.utils.telemetry import clear as telemetry_clear
from workflowkit.utils.telemetry import iter_events as telemetry_iter
from workflowkit.utils.telemetry import record_event, summarize as telemetry_summarize
from workflowkit.utils.updater import ReleaseUpdater


HELP_OVERVIEW = dedent(
    """
    Magic arguments:
      - wfkit workflow:          - list every magic action
      - wfkit workflow:<query>   - list actions whose keyword contains <query>
      - wfkit workflow:<keyword> - run that action (log, cache, data, ...)

    Environment:
      - WORKFLOWKIT_MAGIC_PREFIX    - reserved prefix (default: workflow:)
      - WORKFLOWKIT_HELP_URL        - adds the `help` magic action
      - WORKFLOWKIT_UPDATE_PACKAGE  - adds the `update` magic action
      - WORKFLOWKIT_NO_PLUGINS=1    - skip entry-point magic actions
    """
)


def _build_workflow() -> Workflow:
    updater = None
    if SETTINGS.update_package:
        updater = ReleaseUpdater(SETTINGS, SETTINGS.update_package)
    return Workflow(
        SETTINGS,
        help_url=os.environ.get("WORKFLOWKIT_HELP_URL") or None,
        updater=updater,
        load_plugins=not truthy(os.environ.get("WORKFLOWKIT_NO_PLUGINS")),
    )


def _actions_cmd(args: argparse.Namespace, workflow: Workflow) -> int:
    entries = [
        {"keyword": keyword, "magic": workflow.magic_prefix + keyword, "description": action.description}
        for keyword, action in workflow.registry.items()
    ]
    if args.json:
        print(json.dumps(entries, indent=2, ensure_ascii=False))
    else:
        width = max((len(entry["magic"]) for entry in entries), default=0)
        for entry in entries:
            print(f"{entry['magic']:<{width}}  {entry['description']}")
    record_event(SETTINGS, "cli", {"command": "actions", "count": len(entries)})
    return 0


def _info_cmd(args: argparse.Namespace, workflow: Workflow) -> int:
    payload = {
        "version": __version__,
        "bundleId": SETTINGS.bundle_id,
        "cacheDir": str(SETTINGS.cache_dir),
        "dataDir": str(SETTINGS.data_dir),
        "logFile": str(SETTINGS.log_file),
        "magicPrefix": workflow.magic_prefix,
        "helpUrl": workflow.help_url,
        "updatePackage": SETTINGS.update_package,
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def _log_cmd(args: argparse.Namespace, workflow: Workflow) -> int:
    if args.log_command == "report":
        summary = telemetry_summarize(telemetry_iter(SETTINGS))
        print(json.dumps(summary, indent=2, ensure_ascii=False))
        return 0
    if args.log_command == "clear":
        telemetry_clear(SETTINGS)
        print("Workflow log cleared")
        return 0
    if args.log_command == "tail":
        window = deque(telemetry_iter(SETTINGS), maxlen=args.limit)
        for evt in window:
            print(json.dumps(evt, ensure_ascii=False))
        return 0
    print("Unsupported log command", file=sys.stderr)
    return 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wfkit",
        description=HELP_OVERVIEW,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"wfkit {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    actions_cmd = sub.add_parser("actions", help="List registered magic actions")
    actions_cmd.add_argument("--json", action="store_true", help="Print actions as JSON")
    actions_cmd.set_defaults(func=_actions_cmd)

    info_cmd = sub.add_parser("info", help="Show workflow directories and options")
    info_cmd.set_defaults(func=_info_cmd)

    log_cmd = sub.add_parser("log", help="Inspect the workflow event log")
    log_sub = log_cmd.add_subparsers(dest="log_command", required=True)

    log_report = log_sub.add_parser("report", help="Summarise logged events")
    log_report.set_defaults(func=_log_cmd)

    log_clear = log_sub.add_parser("clear", help="Remove the workflow log file")
    log_clear.set_defaults(func=_log_cmd)

    log_tail = log_sub.add_parser("tail", help="Print last N logged events")
    log_tail.add_argument("--limit", type=int, default=20)
    log_tail.set_defaults(func=_log_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    workflow = _build_workflow()
    raw_args = list(workflow.args(sys.argv[1:] if argv is None else argv))
    parser = build_parser()
    args = parser.parse_args(raw_args)
    return args.func(args, workflow)


if __name__ == "__main__":
    sys.exit(main())
