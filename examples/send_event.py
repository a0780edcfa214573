#!/usr/bin/env python3
"""
Send one event to, or run one query against, a Riemann server.

    python examples/send_event.py --service cpu --metric 0.42 --ttl 60
    python examples/send_event.py --query 'service = "cpu"'
    python examples/send_event.py --config examples/config.yaml --service disk --state warning
"""
import argparse
import logging
import socket
import time

from riemann import RiemannClient, RiemannConfig, RiemannEvent, load_config, run_with_keyboard_interrupt


def parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Send an event to a Riemann server, or query it")
    ap.add_argument("--config", help="YAML file with a riemann: section")
    ap.add_argument("--network", help="tcp, tcp4, tcp6, udp, udp4 or udp6")
    ap.add_argument("--host", help="Riemann server host")
    ap.add_argument("--port", type=int, help="Riemann server port")
    ap.add_argument("--query", help="Run a query instead of sending an event")
    ap.add_argument("--service", default="riemann-async")
    ap.add_argument("--state", default="ok")
    ap.add_argument("--description", default="")
    ap.add_argument("--metric", type=float, help="Metric value (sent as a double, or an int if whole)")
    ap.add_argument("--ttl", type=float, default=0.0)
    ap.add_argument("--event-host", default=socket.gethostname(), help="Host the event is about")
    ap.add_argument("--traffic", action="store_true", help="Print every exchange")
    ap.add_argument("--debug", action="store_true")
    return ap.parse_args()


async def main():
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = load_config(args.config) if args.config else RiemannConfig()
    if args.network: config.network = args.network
    if args.host: config.host = args.host
    if args.port: config.port = args.port
    if args.traffic: config.print_traffic = True

    async with await RiemannClient.from_config(config) as client:
        if args.query is not None:
            events = await client.query(args.query)
            for event in events:
                print(f"{event.host:20} {event.service:30} {event.state:10} {event.metric}")
            print(f"{len(events)} event(s)")
            return

        event = RiemannEvent(
            host=args.event_host,
            service=args.service,
            state=args.state,
            description=args.description,
            ttl=args.ttl,
            time=int(time.time()),
        )
        if args.metric is not None:
            if args.metric.is_integer():
                event.metric_int = int(args.metric)
            else:
                event.metric_double = args.metric
        await client.send(event)
        print(f"Sent {event.service} to {config.address} over {config.network}")


if __name__ == "__main__":
    run_with_keyboard_interrupt(main)
