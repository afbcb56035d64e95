"""Policy document loading with URI fetching and schema validation."""

import json
import logging
import os
import urllib.parse
from dataclasses import dataclass, field
from importlib.resources import files
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from jsonschema import ValidationError, validate

from .rule_configuration import LIST_KINDS, RuleConfiguration, RuleKind, RuleSet
from .wordlist_fetcher import WordListFetcher

logger = logging.getLogger(__name__)


@dataclass
class PolicyDefinition:
    """A loaded policy: its rules plus any message overrides."""

    configuration: RuleConfiguration
    messages: Dict[str, str] = field(default_factory=dict)
    source: Optional[str] = None

    @property
    def rules(self) -> RuleSet:
        return self.configuration.build()


class PolicyLoader:
    """
    Loads password policies from YAML documents.

    A document looks like:

        rules:
          min_length: 10
          cant_contain: [acme]
          black_list: {source: blacklist.txt}
          not_in: {values: [], hashed: ["$2y$..."]}
        messages:
          min_length: "Use {value} or more characters"

    Key order under "rules" is evaluation order.
    """

    def __init__(self, fetcher: Optional[WordListFetcher] = None):
        """
        Initialize policy loader with the bundled policy schema.

        Args:
            fetcher: WordListFetcher used for documents and word list sources
        """
        self.fetcher = fetcher or WordListFetcher()
        schema_file = files("password_policy").joinpath("policy.schema.json")
        with schema_file.open("r") as f:
            self.schema = json.load(f)

    def load(self, source: Union[str, Path, Dict[str, Any]]) -> PolicyDefinition:
        """
        Load a policy from a dict, path or URI.

        Args:
            source: Parsed document, filesystem path, file:// or http(s):// URI

        Returns:
            PolicyDefinition with an unfrozen RuleConfiguration

        Raises:
            ValueError: If the document does not match the policy schema
            RuntimeError: If a remote source cannot be fetched
        """
        if isinstance(source, dict):
            return self._from_document(source, base_dir=None, origin=None)

        uri = str(source)
        document = yaml.safe_load(self.fetcher.read_text(uri)) or {}
        logger.info("Loaded password policy", extra={"source": uri})
        return self._from_document(document, self._base_dir(uri), uri)

    def _base_dir(self, uri: str) -> Optional[str]:
        """Directory that relative word list sources are resolved against."""
        parsed = urllib.parse.urlparse(uri)
        if not parsed.scheme:
            return os.path.dirname(os.path.abspath(uri))
        if parsed.scheme == "file":
            return os.path.dirname(urllib.parse.unquote(parsed.path))
        return None

    def _from_document(
        self, document: Dict[str, Any], base_dir: Optional[str], origin: Optional[str]
    ) -> PolicyDefinition:
        try:
            validate(instance=document, schema=self.schema)
        except ValidationError as e:
            error_path = " -> ".join(str(p) for p in e.path) if e.path else "root"
            raise ValueError(f"Invalid password policy at {error_path}: {e.message}")

        configuration = RuleConfiguration()
        for name, value in (document.get("rules") or {}).items():
            kind = RuleKind(name)
            if kind == RuleKind.NOT_IN and isinstance(value, dict) and "source" not in value:
                configuration.set_not_in(
                    self._word_list(value.get("values"), base_dir),
                    self._word_list(value.get("hashed"), base_dir),
                )
            elif kind in LIST_KINDS:
                configuration.set_rule(kind, self._word_list(value, base_dir))
            else:
                configuration.set_rule(kind, value)

        return PolicyDefinition(
            configuration=configuration,
            messages=dict(document.get("messages") or {}),
            source=origin,
        )

    def _word_list(self, value: Any, base_dir: Optional[str]):
        """Resolve an inline list or a {source: uri} reference."""
        if isinstance(value, dict):
            return self.fetcher.fetch(value["source"], base_dir)
        return value or []


def load_policy(source: Union[str, Path, Dict[str, Any]]) -> RuleSet:
    """Load a policy document and return its frozen RuleSet."""
    return PolicyLoader().load(source).rules
