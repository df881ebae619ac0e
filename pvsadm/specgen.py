"""Random sync specifications for exercising the sync command."""

from __future__ import annotations

import random
import string

from .spec import Source, Spec, TargetItem

PLANS = ("smart", "standard", "vault", "cold")
REGIONS = ("us-east", "jp-tok", "us-south", "au-syd", "eu-de", "ca-tor")

_LETTERS = string.ascii_lowercase[:25]


def generate_random_string(length: int) -> str:
    """Return ``length`` random lower-case letters from 'a' to 'y'."""
    if length < 0:
        raise ValueError("length must not be negative")
    return "".join(random.choices(_LETTERS, k=length))


def generate_spec(num_targets_per_source: int) -> Spec:
    """Return a spec with random bucket names, plans and regions."""
    source = Source(
        bucket="image-sync-" + generate_random_string(6),
        cos="cos-image-sync-test-" + generate_random_string(6),
        object="",
        storage_class=random.choice(PLANS),
        region=random.choice(REGIONS),
    )
    targets = [
        TargetItem(
            bucket="image-sync-" + generate_random_string(6),
            storage_class=random.choice(PLANS),
            region=random.choice(REGIONS),
        )
        for _ in range(num_targets_per_source)
    ]
    return Spec(source=source, target=targets)