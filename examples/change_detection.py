#!/usr/bin/env python3
"""
Change Detection Example

This example demonstrates:
- Fingerprinting nested configuration objects
- Ignoring volatile fields such as timestamps
- Using digests as cache keys
- Detecting real changes between snapshots
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from object_digest import ObjectDigest, digest_object


@dataclass
class Service:
    name: str
    replicas: int
    ports: set[int] = field(default_factory=set)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def build_snapshot(replicas=3):
    """Build a deployment snapshot with a volatile timestamp."""
    return {
        "api": Service("api", replicas, {443, 80}),
        "worker": Service("worker", 2),
        "labels": {"team": "platform", "env": "prod"},
    }


def demonstrate_change_detection():
    """Show which snapshot edits change the digest."""
    print("Object Digest Change Detection Example")
    print("=" * 40)

    baseline = ObjectDigest(build_snapshot(), exclusions="updated_at")
    print(f"Baseline digest:     {baseline}")

    # Same content, new timestamps and a different set order.
    again = ObjectDigest(build_snapshot(), exclusions="updated_at")
    print(f"Rebuilt snapshot:    {again} (unchanged: {again == baseline})")

    scaled = ObjectDigest(build_snapshot(replicas=5), exclusions="updated_at")
    print(f"Scaled api replicas: {scaled} (unchanged: {scaled == baseline})")

    cache = {baseline: "rendered manifest"}
    print(f"Cache hit for rebuilt snapshot: {again in cache}")

    legacy = digest_object(build_snapshot(), exclusions="updated_at", algorithm="md5")
    print(f"Legacy MD5 fingerprint: {legacy}")


if __name__ == "__main__":
    demonstrate_change_detection()
