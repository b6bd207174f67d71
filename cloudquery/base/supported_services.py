from typing import Literal


existing_resources = Literal[
    "gke",
    "gke_mock",
    "health",
    "network",
    "compute",
]

