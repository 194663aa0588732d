#!/usr/bin/env python3
"""
Emotion frames stack health check script
"""

import os
import sys
import time
from typing import List, Tuple

import requests


BACKEND_URL = os.environ.get("BACKEND_URL", "http://localhost:8000")
ANALYSIS_WORKER_URL = os.environ.get("ANALYSIS_WORKER_URL", "http://localhost:8002")


def check_service(name: str, url: str, timeout: int = 5) -> Tuple[bool, str]:
    """Check if a service is healthy"""
    try:
        response = requests.get(url, timeout=timeout)
    except requests.exceptions.ConnectionError:
        return False, f"❌ {name}: Connection refused"
    except requests.exceptions.Timeout:
        return False, f"❌ {name}: Timeout"
    except requests.exceptions.RequestException as e:
        return False, f"❌ {name}: {e}"
    if response.status_code == 200:
        return True, f"✅ {name}: OK"
    return False, f"❌ {name}: HTTP {response.status_code}"


def services() -> List[Tuple[str, str]]:
    """Services to check"""
    return [
        ("Backend API", f"{BACKEND_URL}/api/health"),
        ("Analysis Worker", f"{ANALYSIS_WORKER_URL}/health"),
    ]


def main() -> int:
    """Main health check function"""
    print("🏥 Emotion Frames Health Check")
    print("==============================")

    all_healthy = True
    results = []

    for name, url in services():
        print(f"Checking {name}...")
        healthy, message = check_service(name, url)
        results.append(message)
        if not healthy:
            all_healthy = False
        time.sleep(0.5)

    print("\n📊 Health Check Results:")
    print("========================")
    for result in results:
        print(result)

    if all_healthy:
        print("\n🎉 All services are healthy!")
        print(f"   Backend API: {BACKEND_URL}/api/docs")
        return 0
    print("\n⚠️  Some services are not healthy. Check the logs:")
    print("   docker-compose logs -f")
    return 1


if __name__ == "__main__":
    sys.exit(main())
