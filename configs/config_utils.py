import copy
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


class ConfigMerger:
    @staticmethod
    def merge(base: Dict[str, Any], override: Dict[str, Any], context_description: str = "ConfigMerge") -> Dict[str, Any]:
        """
        Merge ``override`` into a copy of ``base``.

        Nested dictionaries merge recursively; any other override value
        replaces the base value. Neither input is modified.
        """
        if not isinstance(base, dict):
            logger.error(f"[{context_description}] Base for merge is not a dictionary (type: {type(base)}).")
            return copy.deepcopy(override) if isinstance(override, dict) else {}

        if not isinstance(override, dict):
            logger.warning(f"[{context_description}] Override for merge is not a dictionary (type: {type(override)}). Returning base.")
            return copy.deepcopy(base)

        merged = copy.deepcopy(base)
        for key, override_value in override.items():
            base_value = merged.get(key)
            if isinstance(base_value, dict) and isinstance(override_value, dict):
                merged[key] = ConfigMerger.merge(base_value, override_value, f"{context_description} -> {key}")
            else:
                if key in merged and base_value != override_value:
                    logger.debug(f"[{context_description}] Overridden key '{key}'. Old: {str(base_value)[:80]}, New: {str(override_value)[:80]}")
                merged[key] = copy.deepcopy(override_value)

        return merged


def merge_configs(base: Dict[str, Any], *overrides: Dict[str, Any], context: str = "ConfigChain") -> Dict[str, Any]:
    result = base
    for i, override_config in enumerate(overrides):
        result = ConfigMerger.merge(result, override_config, context_description=f"{context}_Step{i + 1}")
    return result
