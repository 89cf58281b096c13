'''
schema-driven fake records for exercising containors.

    schema = {'id': ('pyint', {'min_value': 1, 'max_value': 99}), 'name': 'word'}
    from_schema(schema, seed=7).take(10)          # ContainorArray of dicts
    from_schema(schema, seed=7).keyed('id', 10)   # Containor keyed by id
'''

import numpy as np
from faker import Faker
from containor import Containor, ContainorArray
from typing import Any, Dict, Optional


class Generator:
    """schema interpreter."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)
        # per-generator counters for "sequence" providers, keyed by the config dict
        self._sequences: Dict[int, int] = {}

    def _resolve_faker_method(self, method_name: str, kwargs: Optional[Dict] = None) -> Any:
        try:
            method = getattr(self._fake, method_name)
        except AttributeError:
            raise ValueError(f"faker has no provider '{method_name}'")
        return method(**(kwargs or {}))

    def _resolve_provider(self, config: Dict, context: Dict) -> Any:
        provider = config["_qen_provider"]
        if provider == "ref":
            key = config["key"]
            if key not in context:
                raise ValueError(f"reference to '{key}' not found in current context.")
            return context[key]

        elif provider == "choice":
            # convert numpy's choice result to a native python type
            choice_result = self._rng.choice(config["from"])
            return choice_result.item() if hasattr(choice_result, 'item') else choice_result

        elif provider == "sequence":
            # monotonically increasing ids, handy for unique containor keys
            counter = self._sequences.get(id(config), config.get("start", 0))
            self._sequences[id(config)] = counter + 1
            return counter

        elif provider == "literal":
            if "value" not in config:
                raise ValueError("_qen_provider 'literal' requires a 'value' key.")
            return config["value"]

        else:
            raise ValueError(f"unknown _qen_provider: '{provider}'")

    def create(self, schema: Any, context: Optional[Dict] = None) -> Any:
        current_context = context or {}

        if isinstance(schema, dict):
            if "_qen_provider" in schema:
                return self._resolve_provider(schema, current_context)

            # build the record field by field so refs can see earlier siblings
            generated_obj = {}
            for k, v in schema.items():
                generated_obj[k] = self.create(v, {**current_context, **generated_obj})
            return generated_obj

        if isinstance(schema, list):
            if not schema: return []
            return [self.create(schema[0], current_context) for _ in range(int(self._rng.integers(1, 5, endpoint=True)))]

        if isinstance(schema, str):
            if hasattr(self._fake, schema):
                return self._resolve_faker_method(schema)
            return schema  # otherwise, it's a literal string.

        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._resolve_faker_method(schema[0], schema[1])

        return schema


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._generator = Generator(seed)

    def take(self, count: int) -> ContainorArray:
        return ContainorArray.from_(self._generator.create(self._schema) for _ in range(count))

    def keyed(self, field: str, count: int) -> Containor:
        """records keyed by one of their fields; a repeated key keeps the last record"""
        return Containor.from_(
            (record[field], record) for record in self.take(count))


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)
