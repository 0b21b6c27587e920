# run/event.py
"""
事件发送：

  python run/event.py state  <player_id> <sim_id> <event_text> [event_id]
  python run/event.py ask    <player_id> <sim_id> <ask_text> <npc_id> [ask_id]
  python run/event.py stream <player_id> <sim_id> [interval_ms]

state / ask 走 POST /stream/event；
stream 走 WebSocket，按 interval_ms（默认 3000，即 20 条/分钟）从 data/game_events.json 随机发送，
Ctrl+C 停止并打印统计。服务端对每个 player 有限流，间隔太小会收到 429 错误消息。
全部使用 DISTR_KEY。
"""
import asyncio
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from clients.event_client import EventClient
from commons.base_client import models_or_raw
from mydataclass.stream_event import AskEventResponse, StateEventResponse
from streamer.corpus import EventCorpus
from streamer.stream_client import EventStreamClient, parse_interval_ms, run_stream
from tools.cli_utils import UsageArgumentParser, print_item, report_result, run_cli
from tools.config_loader import env
from tools.request_utils import stream_ws_url


def build_parser() -> UsageArgumentParser:
    parser = UsageArgumentParser(
        prog="event.py", description="Stream events: state (game events), ask (NPC questions), stream (WebSocket)."
    )
    sub = parser.add_subparsers(dest="op")

    p = sub.add_parser("state", help="post one game state event")
    p.add_argument("player_id")
    p.add_argument("sim_id")
    p.add_argument("event_text")
    p.add_argument("event_id", nargs="?")

    p = sub.add_parser("ask", help="ask an NPC a question")
    p.add_argument("player_id")
    p.add_argument("sim_id")
    p.add_argument("ask_text")
    p.add_argument("npc_id")
    p.add_argument("ask_id", nargs="?")

    p = sub.add_parser("stream", help="stream random game events over WebSocket until Ctrl+C")
    p.add_argument("player_id")
    p.add_argument("sim_id")
    p.add_argument("interval_ms", nargs="?")
    p.add_argument("--seed", type=int, default=None, help="seed the random event picker")
    return parser


def stream(player_id: str, sim_id: str, interval_raw=None, seed=None, connect=None) -> int:
    """WebSocket 流模式；连接失败抛 StreamError（由 run_cli 转成退出码 1）。"""
    interval_ms = parse_interval_ms(interval_raw)
    client = EventStreamClient(
        stream_ws_url(env("BASE_URL"), sim_id, player_id),
        env("DISTR_KEY"),
        EventCorpus.from_file(seed=seed),
        interval_ms=interval_ms,
        connect=connect,
    )
    asyncio.run(run_stream(client))
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.op:
        parser.print_help()
        return 0

    if args.op == "stream":
        return stream(args.player_id, args.sim_id, args.interval_ms, args.seed)

    with EventClient.from_env() as client:
        if args.op == "state":
            result = client.send_state(args.player_id, args.sim_id, args.event_text, args.event_id)
            model_cls = StateEventResponse
        else:
            result = client.send_ask(args.player_id, args.sim_id, args.ask_text, args.npc_id, args.ask_id)
            model_cls = AskEventResponse

    if not report_result(f"stream event {args.op}", result):
        return 1
    print_item(models_or_raw(model_cls, result.body))
    return 0


def cli():
    sys.exit(run_cli(main))


if __name__ == "__main__":
    cli()
