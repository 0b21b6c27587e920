# run/get_player.py
"""按 player_id + sim_id 查询 player。  python run/get_player.py <player_id> <sim_id>"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.player_client import PlayerClient
from commons.base_client import models_or_raw
from mydataclass.player import PlayerInfo
from tools.cli_utils import UsageArgumentParser, print_item, report_result, run_cli


def main(argv=None) -> int:
    parser = UsageArgumentParser(prog="get_player.py", description="Fetch a single player by id and sim_id.")
    parser.add_argument("player_id")
    parser.add_argument("sim_id")
    args = parser.parse_args(argv)

    with PlayerClient.from_env() as client:
        result = client.get_player(args.player_id, args.sim_id)

    if not report_result("GET /user/player/{player_id}", result):
        return 1
    print_item(models_or_raw(PlayerInfo, result.body))
    return 0


if __name__ == "__main__":
    sys.exit(run_cli(main))
