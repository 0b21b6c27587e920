# run/create_player.py
"""创建 player 会话（DISTR_KEY）。  python run/create_player.py <sim_id> [expire_min]"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.player_client import PlayerClient
from commons.base_client import models_or_raw
from mydataclass.player import PlayerInfo
from tools.cli_utils import UsageArgumentParser, positive_int_arg, print_item, report_result, run_cli


def main(argv=None) -> int:
    parser = UsageArgumentParser(prog="create_player.py", description="Create a player session.")
    parser.add_argument("sim_id")
    parser.add_argument("expire_min", nargs="?", type=positive_int_arg("expire_min"))
    args = parser.parse_args(argv)

    with PlayerClient.from_env(need_distr_key=True) as client:
        result = client.create_player(args.sim_id, args.expire_min)

    if not report_result("POST /user/player", result):
        return 1
    print_item(models_or_raw(PlayerInfo, result.body))
    return 0


if __name__ == "__main__":
    sys.exit(run_cli(main))
