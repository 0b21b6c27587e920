# run/npc.py
"""
NPC 增删改查（create 从预设档案创建）：

  python run/npc.py create <sim_id> [profile name]
  python run/npc.py update <npc_id> [profile name]
  python run/npc.py list <sim_id>
  python run/npc.py get <npc_id>
  python run/npc.py delete <npc_id>

profile name 取自 data/npc_interests.json；不传则列出可选档案。
"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.npc_client import NpcClient
from commons.base_client import models_or_raw
from mydataclass.npc import NpcInfo
from tools.cli_utils import (
    UsageArgumentParser,
    join_rest,
    print_item,
    print_items,
    print_profile_options,
    report_result,
    run_cli,
)
from tools.presets import find_profile, load_npc_profiles, profile_names

SUMMARY_FIELDS = ("npc_id", "sim_id", "creation_time", "update_time")


def build_parser() -> UsageArgumentParser:
    parser = UsageArgumentParser(prog="npc.py", description="NPC CRUD: create (from preset), update, list, get, delete.")
    sub = parser.add_subparsers(dest="op")

    p = sub.add_parser("create", help="create an NPC in a simulation from a preset profile")
    p.add_argument("sim_id")
    p.add_argument("profile", nargs="*")

    p = sub.add_parser("update", help="update an NPC's description/interests from a preset profile")
    p.add_argument("npc_id")
    p.add_argument("profile", nargs="*")

    p = sub.add_parser("list", help="list NPCs of a simulation")
    p.add_argument("sim_id")

    p = sub.add_parser("get", help="get one NPC")
    p.add_argument("npc_id")

    p = sub.add_parser("delete", help="delete one NPC")
    p.add_argument("npc_id")
    return parser


def _pick_profile(name: str):
    """未传档案名：列出可选项并返回 None；传了但不存在：UsageError。"""
    profiles = load_npc_profiles()
    if not name:
        print_profile_options("Available NPC profiles", profile_names(profiles))
        print("\nPass one profile name after the id.")
        return None
    return find_profile(profiles, name)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.op:
        parser.print_help()
        return 0

    if args.op in ("create", "update"):
        profile = _pick_profile(join_rest(args.profile))
        if profile is None:
            return 0

    with NpcClient.from_env() as client:
        if args.op == "create":
            result = client.create_npc(args.sim_id, profile.name, profile.description, profile.interests)
        elif args.op == "update":
            result = client.update_npc(args.npc_id, profile.description, profile.interests)
        elif args.op == "list":
            result = client.list_npcs(args.sim_id)
        elif args.op == "get":
            result = client.get_npc(args.npc_id)
        else:
            result = client.delete_npc(args.npc_id)

    if not report_result(f"npc {args.op}", result):
        return 1

    if args.op == "list":
        print_items(models_or_raw(NpcInfo, result.body, many=True), SUMMARY_FIELDS)
    elif args.op != "delete" or result.body:
        print_item(models_or_raw(NpcInfo, result.body), SUMMARY_FIELDS)
    return 0


def cli():
    sys.exit(run_cli(main))


if __name__ == "__main__":
    cli()
