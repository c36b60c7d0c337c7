#!/usr/bin/env python3
"""Listen for muse-io OSC data, print it, and optionally republish EEG over LSL.

Start muse-io with e.g. ``muse-io --osc osc.udp://localhost:5001`` and run
``python scripts/run_receiver.py --port 5001 --lsl``.
"""

import argparse
import logging
import time

from museosc.config import ReceiverConfig
from museosc.events.console import PrintingListener
from museosc.receiver import MuseIOReceiver


def build_config(args: argparse.Namespace) -> ReceiverConfig:
    return ReceiverConfig(
        host=args.host,
        port=args.port,
        refresh_config=args.refresh_config,
        log_level=args.log_level,
        lsl_stream_name=args.lsl_name,
    )


def main() -> None:
    ap = argparse.ArgumentParser(description="Receive Muse data from muse-io over OSC")
    ap.add_argument("--host", default="0.0.0.0", help="Address to bind (default: 0.0.0.0)")
    ap.add_argument("-p", "--port", type=int, default=5000, help="UDP port (default: 5000)")
    ap.add_argument("--lsl", action="store_true", help="Republish EEG as an LSL stream")
    ap.add_argument("--lsl-name", default="MuseEEG", help="LSL stream name (default: MuseEEG)")
    ap.add_argument("--no-eeg", action="store_true", help="Don't print raw EEG lines")
    ap.add_argument("--refresh-config", action="store_true",
                    help="Apply every /muse/config, not just the first one")
    ap.add_argument("--log-level", default="INFO",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args()

    config = build_config(args)
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    receiver = MuseIOReceiver(config)
    receiver.register_listener(PrintingListener(show_eeg=not args.no_eeg))

    if args.lsl:
        from museosc.lsl.outlet import LslEegOutlet
        receiver.register_listener(LslEegOutlet(config))

    try:
        receiver.connect()
    except OSError as e:
        print(f"Could not bind port {config.port}: {e}")
        raise SystemExit(1)

    print(f"Receiving on udp://{config.host}:{config.port}. Press Ctrl+C to stop.\n")
    try:
        while True:
            time.sleep(1.0)
    except KeyboardInterrupt:
        pass
    finally:
        receiver.disconnect()
        print("Stopped.")


if __name__ == "__main__":
    main()
