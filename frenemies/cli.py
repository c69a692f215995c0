import argparse
from pathlib import Path
from typing import List, Optional

from . import config
from .audit import read_events
from .policy import load_policy, validate_policy
from .utils import sha256_file


def _audit_path(raw: Optional[str]) -> Path:
    if raw:
        return Path(raw)
    return config.audit_log_from_env() or config.AUDIT_LOG_FILE


def handle_audit(args: argparse.Namespace) -> int:
    path = _audit_path(args.log)
    try:
        events = read_events(path, limit=args.limit)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Cannot read audit log {path}: {exc}")
    if not events:
        print("No audit events.")
        return 0
    for ev in events:
        print(f"{ev['timestamp']} {ev['event']} actor={ev['actor']} data={ev['data']}")
    return 0


def handle_policy(args: argparse.Namespace) -> int:
    path = Path(args.path)
    try:
        doc = load_policy(path)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Cannot read policy {path}: {exc}")

    violations = validate_policy(doc)
    print(f"name:        {doc.get('name', 'default')}")
    print(f"sha256:      {sha256_file(path)}")
    print(f"recipients:  {_labels(doc.get('recipients'))}")
    print(f"accept_from: {_labels(doc.get('accept_from'))}")
    print(f"Policy:      {'PASS' if not violations else 'FAIL'}")
    for v in violations:
        print(f"  - {v}")
    return 0 if not violations else 1


def _labels(raw: object) -> str:
    if not raw:
        return "(nobody)"
    if isinstance(raw, list):
        return ", ".join(str(label) for label in raw)
    return str(raw)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Frenemies sealed-envelope tooling")
    sub = parser.add_subparsers(dest="command")

    audit_cmd = sub.add_parser("audit", help="Show recent audit events")
    audit_cmd.add_argument("--log", help=f"Audit log path (default: ${config.AUDIT_LOG_ENV} or {config.AUDIT_LOG_FILE})")
    audit_cmd.add_argument(
        "--limit", type=int, default=config.AUDIT_DEFAULT_LIMIT, help="Number of events to show"
    )
    audit_cmd.set_defaults(func=handle_audit)

    policy_cmd = sub.add_parser("policy", help="Validate a party policy file (YAML/JSON)")
    policy_cmd.add_argument("path")
    policy_cmd.set_defaults(func=handle_policy)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
