# run/delete_npc.py
"""删除 NPC（成功返回 204，无响应体）。  python run/delete_npc.py <npc_id>"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.npc_client import NpcClient
from tools.cli_utils import UsageArgumentParser, report_result, run_cli


def main(argv=None) -> int:
    parser = UsageArgumentParser(prog="delete_npc.py", description="Delete an NPC.")
    parser.add_argument("npc_id")
    args = parser.parse_args(argv)

    with NpcClient.from_env() as client:
        result = client.delete_npc(args.npc_id)

    return 0 if report_result(f"DELETE /npc ({result.status})", result) else 1


if __name__ == "__main__":
    sys.exit(run_cli(main))
