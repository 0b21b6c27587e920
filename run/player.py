# run/player.py
"""
player 会话增删查：

  python run/player.py create <sim_id> [expire_min]
  python run/player.py list <sim_id>
  python run/player.py get <player_id> <sim_id>
  python run/player.py delete <player_id> <sim_id>

create 使用 DISTR_KEY，其余使用 API_KEY。
"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.player_client import PlayerClient
from commons.base_client import models_or_raw
from mydataclass.player import PlayerInfo
from tools.cli_utils import (
    UsageArgumentParser,
    positive_int_arg,
    print_item,
    print_items,
    report_result,
    run_cli,
)


def build_parser() -> UsageArgumentParser:
    parser = UsageArgumentParser(prog="player.py", description="Player CRUD: create, list, get, delete.")
    sub = parser.add_subparsers(dest="op")

    p = sub.add_parser("create", help="create a player session (uses DISTR_KEY)")
    p.add_argument("sim_id")
    p.add_argument("expire_min", nargs="?", type=positive_int_arg("expire_min"))

    p = sub.add_parser("list", help="list players of a simulation")
    p.add_argument("sim_id")

    for op in ("get", "delete"):
        p = sub.add_parser(op, help=f"{op} one player")
        p.add_argument("player_id")
        p.add_argument("sim_id")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.op:
        parser.print_help()
        return 0

    with PlayerClient.from_env(need_distr_key=args.op == "create") as client:
        if args.op == "create":
            result = client.create_player(args.sim_id, args.expire_min)
        elif args.op == "list":
            result = client.list_players(args.sim_id)
        elif args.op == "get":
            result = client.get_player(args.player_id, args.sim_id)
        else:
            result = client.delete_player(args.player_id, args.sim_id)

    if not report_result(f"player {args.op}", result):
        return 1

    if args.op == "list":
        print_items(models_or_raw(PlayerInfo, result.body, many=True))
    else:
        print_item(models_or_raw(PlayerInfo, result.body))
    return 0


def cli():
    sys.exit(run_cli(main))


if __name__ == "__main__":
    cli()
