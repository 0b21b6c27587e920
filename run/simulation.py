# run/simulation.py
"""
simulation 增删改查：

  python run/simulation.py create <name>
  python run/simulation.py list
  python run/simulation.py get <sim_id>
  python run/simulation.py lore <sim_id> [lore profile name]
  python run/simulation.py delete <sim_id>

lore 档案取自 data/simulation_lores.json；不传则列出可选项。
"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.simulation_client import SimulationClient
from commons.base_client import models_or_raw
from mydataclass.simulation import SimulationInfo
from tools.cli_utils import (
    UsageArgumentParser,
    join_rest,
    print_item,
    print_items,
    print_profile_options,
    report_result,
    run_cli,
)
from tools.presets import find_profile, load_lore_profiles, profile_names


def build_parser() -> UsageArgumentParser:
    parser = UsageArgumentParser(
        prog="simulation.py", description="Simulation CRUD: create, list, get, lore (apply preset), delete."
    )
    sub = parser.add_subparsers(dest="op")

    p = sub.add_parser("create", help="create a simulation")
    p.add_argument("name", nargs="+")

    sub.add_parser("list", help="list simulations")

    p = sub.add_parser("get", help="get one simulation")
    p.add_argument("sim_id")

    p = sub.add_parser("lore", help="apply a preset lore to a simulation")
    p.add_argument("sim_id")
    p.add_argument("profile", nargs="*")

    p = sub.add_parser("delete", help="delete one simulation")
    p.add_argument("sim_id")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.op:
        parser.print_help()
        return 0

    lore = None
    if args.op == "lore":
        lores = load_lore_profiles()
        name = join_rest(args.profile)
        if not name:
            print_profile_options("Available lore profiles", profile_names(lores))
            print("\nPass one lore profile name after the sim_id.")
            return 0
        lore = find_profile(lores, name)

    with SimulationClient.from_env() as client:
        if args.op == "create":
            result = client.create_simulation(join_rest(args.name))
        elif args.op == "list":
            result = client.list_simulations()
        elif args.op == "get":
            result = client.get_simulation(args.sim_id)
        elif args.op == "lore":
            result = client.set_lore(args.sim_id, lore.lore)
        else:
            result = client.delete_simulation(args.sim_id)

    if not report_result(f"simulation {args.op}", result):
        return 1

    if args.op == "list":
        print_items(models_or_raw(SimulationInfo, result.body, many=True))
    else:
        print_item(models_or_raw(SimulationInfo, result.body))
    return 0


def cli():
    sys.exit(run_cli(main))


if __name__ == "__main__":
    cli()
