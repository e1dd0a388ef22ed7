#!/usr/bin/env python3
"""Demo client that walks through the portal HTTP API."""
import sys

import requests

from complaintportal.config import get_service_url

PORTAL_URL = get_service_url("portal")


def call(method: str, path: str, **kwargs) -> dict:
    resp = requests.request(method, f"{PORTAL_URL}{path}", timeout=5, **kwargs)
    resp.raise_for_status()
    return resp.json()


def demo():
    print("\n" + "=" * 70)
    print("📝 COMPLAINT PORTAL DEMO")
    print("=" * 70)

    user = call("POST", "/register", json={"name": "A", "email": "a@x.com"})
    secret = user["secretCode"]
    print(f"\n✓ Registered {user['name']} <{user['email']}> (id {user['id']})")
    print(f"  Secret code: {secret}")

    complaint = call("POST", "/submitComplaint", json={
        "title": "T",
        "summary": "s",
        "rating": 3,
        "userId": user["id"],
    })
    print(f"✓ Submitted complaint {complaint['id']}")

    mine = call("GET", "/getAllComplaintsForUser", params={"secretCode": secret})
    print(f"✓ User has {len(mine)} complaint(s)")
    for c in mine:
        print(f"    [{'x' if c['resolved'] else ' '}] {c['title']} (rating {c['rating']})")

    resolved = call("POST", "/resolveComplaint", params={"complaintId": complaint["id"]})
    print(f"✓ Resolved complaint {resolved['id']}")

    viewed = call("GET", "/viewComplaint", params={"complaintId": complaint["id"]})
    print(f"✓ Complaint now resolved={viewed['resolved']}")

    everything = call("GET", "/getAllComplaintsForAdmin")
    print(f"\n📋 Admin view: {len(everything)} complaint(s) in total")


if __name__ == "__main__":
    try:
        demo()
    except requests.exceptions.RequestException as e:
        print(f"Failed to reach portal service: {e}")
        print("\n⚠️  Make sure the service is running: python3 start_services.py")
        sys.exit(1)
