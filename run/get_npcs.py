# run/get_npcs.py
"""列出某个 simulation 下的全部 NPC。  python run/get_npcs.py <sim_id>"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.npc_client import NpcClient
from commons.base_client import models_or_raw
from mydataclass.npc import NpcInfo
from tools.cli_utils import UsageArgumentParser, print_items, report_result, run_cli


def main(argv=None) -> int:
    parser = UsageArgumentParser(prog="get_npcs.py", description="List all NPCs in a simulation.")
    parser.add_argument("sim_id")
    args = parser.parse_args(argv)

    with NpcClient.from_env() as client:
        result = client.list_npcs(args.sim_id)

    if not report_result("GET /simulation/{sim_id}/npcs", result):
        return 1
    print_items(models_or_raw(NpcInfo, result.body, many=True))
    return 0


if __name__ == "__main__":
    sys.exit(run_cli(main))
