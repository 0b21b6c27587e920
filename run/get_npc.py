# run/get_npc.py
"""按 npc_id 查询单个 NPC。  python run/get_npc.py <npc_id>"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.npc_client import NpcClient
from commons.base_client import models_or_raw
from mydataclass.npc import NpcInfo
from tools.cli_utils import UsageArgumentParser, print_item, report_result, run_cli


def main(argv=None) -> int:
    parser = UsageArgumentParser(prog="get_npc.py", description="Fetch a single NPC by id.")
    parser.add_argument("npc_id")
    args = parser.parse_args(argv)

    with NpcClient.from_env() as client:
        result = client.get_npc(args.npc_id)

    if not report_result("GET /npc/{npc_id}", result):
        return 1
    print_item(models_or_raw(NpcInfo, result.body))
    return 0


if __name__ == "__main__":
    sys.exit(run_cli(main))
