# run/delete_player.py
"""删除 player。  python run/delete_player.py <player_id> <sim_id>"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.player_client import PlayerClient
from commons.base_client import models_or_raw
from mydataclass.player import PlayerInfo
from tools.cli_utils import UsageArgumentParser, print_item, report_result, run_cli


def main(argv=None) -> int:
    parser = UsageArgumentParser(prog="delete_player.py", description="Delete a player.")
    parser.add_argument("player_id")
    parser.add_argument("sim_id")
    args = parser.parse_args(argv)

    with PlayerClient.from_env() as client:
        result = client.delete_player(args.player_id, args.sim_id)

    if not report_result("DELETE /user/player", result, show_time=False):
        return 1
    print_item(models_or_raw(PlayerInfo, result.body))
    return 0


if __name__ == "__main__":
    sys.exit(run_cli(main))
