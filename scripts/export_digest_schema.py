"""Export the object-digest record JSON Schema."""

from __future__ import annotations

import json
from pathlib import Path

from object_digest.schemas import CURRENT_DIGEST_SCHEMA_VERSION, DigestRecord


def main() -> None:
    """Write the JSON Schema for :class:`DigestRecord` to the repository root."""

    schema = DigestRecord.model_json_schema()
    output_path = Path(__file__).resolve().parent.parent / (
        f"digest_schema_v{CURRENT_DIGEST_SCHEMA_VERSION}.json"
    )
    output_path.write_text(json.dumps(schema, indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
