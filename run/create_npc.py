# run/create_npc.py
"""
随机兴趣创建单个 NPC（从内置语料里随机挑 13~17 条兴趣）。
按预设档案创建请用 run/npc.py create。

  python run/create_npc.py <sim_id>
"""
import os
import sys
import time

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.npc_client import NpcClient
from commons.base_client import models_or_raw
from mydataclass.npc import NpcInfo
from tools.cli_utils import UsageArgumentParser, print_item, report_result, run_cli
from tools.presets import pick_random_interests

DESCRIPTION = "NPC created by integration test."


def main(argv=None) -> int:
    parser = UsageArgumentParser(prog="create_npc.py", description="Create one NPC with random interests.")
    parser.add_argument("sim_id")
    args = parser.parse_args(argv)

    npc_name = f"NPC {int(time.time() * 1000)}"
    interests = pick_random_interests()

    with NpcClient.from_env() as client:
        result = client.create_npc(args.sim_id, npc_name, DESCRIPTION, interests)

    if not report_result("POST /npc", result):
        return 1
    print_item(models_or_raw(NpcInfo, result.body))
    return 0


if __name__ == "__main__":
    sys.exit(run_cli(main))
