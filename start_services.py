#!/usr/bin/env python3
"""Start, stop or restart the complaint portal service process."""
import argparse
import os
import signal
import subprocess
import sys
import time
from pathlib import Path

import requests

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from complaintportal import config

# service name -> module under services_http/
SERVICES = {
    "portal": "portal_service.py",
}

processes = []


def start_services():
    """Start all services in background."""
    env = os.environ.copy()
    env['PYTHONPATH'] = str(project_root)

    log_dir = project_root / config.LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    print("🚀 Starting services...")
    print("-" * 60)

    for service_name, module in SERVICES.items():
        service_path = project_root / "services_http" / module
        port = config.SERVICE_PORTS[service_name]
        print(f"Starting {service_name:12} on port {port}...")

        stdout_log = log_dir / f"{service_name}_stdout.log"
        stderr_log = log_dir / f"{service_name}_stderr.log"

        proc = subprocess.Popen(
            [sys.executable, str(service_path)],
            stdout=open(stdout_log, 'w'),
            stderr=open(stderr_log, 'w'),
            cwd=str(project_root),
            env=env
        )
        processes.append((service_name, port, proc))
        time.sleep(0.5)

    print("-" * 60)
    print(f"✅ Started {len(processes)} services")
    print("\nService endpoints:")
    for name, port, _ in processes:
        print(f"  {name:15} → http://localhost:{port}")
    print("\nPress Ctrl+C to stop all services")


def shutdown_services(signum=None, frame=None):
    """Stop all services gracefully."""
    print("\n🛑 Shutting down services...")
    for name, port, proc in processes:
        print(f"Stopping {name}...")
        proc.terminate()
        try:
            proc.wait(timeout=3)
        except subprocess.TimeoutExpired:
            proc.kill()
    print("✅ All services stopped")
    if signum is not None:
        sys.exit(0)


def kill_all_services():
    """Kill running services by process name."""
    print("🛑 Killing all services...")
    for service_name, module in SERVICES.items():
        subprocess.run(
            ["pkill", "-f", f"python.*services_http/{module}"],
            check=False,
            capture_output=True
        )
        print(f"  ✓ Killed {service_name}")
    print("✅ All services killed")


def check_health():
    """Check if services are responding."""
    # the portal pings MongoDB before serving, allow for the connection timeout
    time.sleep(2)

    print("\n🔍 Health check...")
    healthy = 0
    for name, port, proc in processes:
        if proc.poll() is not None:
            print(f"  ✗ {name} (exited with {proc.returncode}, see logs/{name}_stderr.log)")
            continue
        try:
            resp = requests.get(f"http://localhost:{port}/health", timeout=2)
            if resp.status_code == 200:
                healthy += 1
                print(f"  ✓ {name}")
            else:
                print(f"  ✗ {name} (HTTP {resp.status_code})")
        except requests.exceptions.RequestException as e:
            print(f"  ✗ {name} ({e})")

    print(f"\n{healthy}/{len(processes)} services healthy")
    return healthy == len(processes)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Manage the complaint portal service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 start_services.py start      # Start the portal
  python3 start_services.py stop       # Stop the portal
  python3 start_services.py restart    # Restart the portal
        """
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="start",
        choices=["start", "stop", "restart"],
        help="Command to execute (default: start)"
    )
    args = parser.parse_args()

    if args.command == "stop":
        kill_all_services()
        sys.exit(0)

    elif args.command == "restart":
        kill_all_services()
        print("\n⏳ Waiting for processes to terminate...")
        time.sleep(2)

    signal.signal(signal.SIGINT, shutdown_services)
    signal.signal(signal.SIGTERM, shutdown_services)

    try:
        start_services()

        if check_health():
            print("\n✅ All services are healthy and ready!")
        else:
            print("\n⚠️  Some services failed health check")

        print("\nServices running... (Ctrl+C to stop)")
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        shutdown_services()
