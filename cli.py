import argparse
import json
import logging
import sys
from bizplan.export import format_plan_for_export
from bizplan.graph import generate, modify
from bizplan.schemas import BusinessPlanInput
from bizplan.sectionizer import sectionize
from bizplan.store import get_store

logging.basicConfig(level=logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate and sectionize business plans")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("sectionize", help="Split a plain-text plan into sections")
    p.add_argument("file", help="Path to the text file, or - for stdin")

    p = sub.add_parser("generate", help="Generate a new plan")
    p.add_argument("--business_name", required=True)
    p.add_argument("--industry", required=True)
    p.add_argument("--business_type", required=True)
    p.add_argument("--location", required=True)
    p.add_argument("--target_audience", required=True)
    p.add_argument("--unique_value", required=True)
    p.add_argument("--revenue_model", default="")
    p.add_argument("--goals", default="")
    p.add_argument("--user_id", default="user1")

    p = sub.add_parser("modify", help="Create a modified copy of a stored plan")
    p.add_argument("plan_id")
    p.add_argument("--request", required=True)

    p = sub.add_parser("export", help="Print a stored plan as text")
    p.add_argument("plan_id")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if args.command == "sectionize":
            if args.file == "-":
                text = sys.stdin.read()
            else:
                with open(args.file, encoding="utf-8") as f:
                    text = f.read()
            print(json.dumps([s.model_dump() for s in sectionize(text)], indent=2, ensure_ascii=False))
        elif args.command == "generate":
            fields = {k: v for k, v in vars(args).items() if k in BusinessPlanInput.model_fields}
            plan = generate(BusinessPlanInput(**fields), user_id=args.user_id)
            print(plan.model_dump_json(indent=2))
        elif args.command == "modify":
            plan = modify(get_store().get(args.plan_id), args.request)
            print(plan.model_dump_json(indent=2))
        elif args.command == "export":
            store = get_store()
            plan = store.get(args.plan_id)
            text = format_plan_for_export(plan)
            store.increment_export_count(plan.id)
            print(text)
    except Exception as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
