# run/get_players.py
"""列出某个 simulation 下的全部 player。  python run/get_players.py <sim_id>"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.player_client import PlayerClient
from commons.base_client import models_or_raw
from mydataclass.player import PlayerInfo
from tools.cli_utils import UsageArgumentParser, print_items, report_result, run_cli


def main(argv=None) -> int:
    parser = UsageArgumentParser(prog="get_players.py", description="List all players in a simulation.")
    parser.add_argument("sim_id")
    args = parser.parse_args(argv)

    with PlayerClient.from_env() as client:
        result = client.list_players(args.sim_id)

    if not report_result("GET /user/players", result):
        return 1
    print_items(models_or_raw(PlayerInfo, result.body, many=True))
    return 0


if __name__ == "__main__":
    sys.exit(run_cli(main))
