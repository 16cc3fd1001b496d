#!/usr/bin/env python3
"""
Run script for the simulation editor web application.
"""

import argparse
import sys
import socket
from datetime import date
from pathlib import Path

# Add the parent directory to the path so we can import the salesim package
sys.path.append(str(Path(__file__).parent.parent))

from salesim.exceptions import ConfigIOError, InvalidParametersError
from salesim.utils.logger import setup_logging
from webapp.app import create_app


def find_available_port(start_port=8080, max_attempts=10):
    """Find an available port starting from start_port"""
    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(('localhost', port))
                return port
        except OSError:
            continue
    return None


def main():
    parser = argparse.ArgumentParser(description="Interactive sales simulation editor")
    parser.add_argument("--config", type=Path, help="parameter file")
    parser.add_argument("--start-date", type=date.fromisoformat, help="date of day 0 (default: today)")
    parser.add_argument("--currency", default="Euro", help="label of the cash values")
    parser.add_argument("--port", type=int, default=8080, help="first port to try")
    args = parser.parse_args()

    setup_logging(level="INFO", console_output=True, file_output=False)

    try:
        app = create_app(config_path=args.config, start_date=args.start_date, currency=args.currency)
    except (ConfigIOError, InvalidParametersError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    port = find_available_port(args.port)
    if port is None:
        print(f"❌ Error: No available ports found in range {args.port}-{args.port + 9}")
        sys.exit(1)

    print("Starting Sales Simulation editor...")
    print(f"Open your browser and go to: http://localhost:{port}")
    print("Press Ctrl+C to stop the server")

    try:
        app.run(host='127.0.0.1', port=port)
    except KeyboardInterrupt:
        print("\nServer stopped by user")


if __name__ == '__main__':
    main()
