"""Structured prompt builder for the column-mapping oracle."""

import json
from typing import Any, Dict, List, Mapping, Sequence

from app.domain.schema_registry import SchemaDefinition

_SYSTEM_INSTRUCTIONS = """\
You are a data-mapping assistant for a supply chain platform.

STRICT RULES:
- Map every input row onto the target fields listed below.
- Return exactly one JSON object per input row, in the same order.
- Use the target field names exactly as written.
- Apply the stated defaults when a row has no value for a field.
- Dates must be ISO formatted (YYYY-MM-DD).
- Return ONLY a JSON array. Do NOT include any text outside the array.
"""

_SECTION_TEMPLATE = """\
## {title}
```json
{data}
```
"""


class MappingPromptBuilder:
    """Builds a deterministic prompt asking the oracle to map rows.

    The prompt carries the target field list with types, synonyms and
    defaults, followed by the raw rows as JSON.
    """

    def build_prompt(
        self,
        rows: Sequence[Mapping[str, Any]],
        definition: SchemaDefinition,
    ) -> str:
        """Build the mapping prompt for one chunk of rows.

        Args:
            rows: Raw rows keyed by the source sheet's headers.
            definition: Target schema the rows must be mapped onto.

        Returns:
            A fully formatted prompt string ready for LLM consumption.
        """
        field_lines = "\n".join(f"- {spec.describe()}" for spec in definition.fields)
        rows_section = _SECTION_TEMPLATE.format(
            title=f"Input rows ({len(rows)})",
            data=json.dumps(self._serializable_rows(rows), indent=2, default=str),
        )

        return (
            f"{_SYSTEM_INSTRUCTIONS}\n"
            f"# TARGET SCHEMA: {definition.schema_type.value}\n\n"
            f"{field_lines}\n\n"
            f"# PROVIDED DATA\n\n{rows_section}\n"
            f"# TASK\n\n"
            f"Return a JSON array of exactly {len(rows)} objects, "
            f"one per input row, using only the target field names."
        )

    @staticmethod
    def _serializable_rows(rows: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        return [{str(key): value for key, value in row.items()} for row in rows]
