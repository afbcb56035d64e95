"""
Tests for policy document loading and word list fetching.
"""
import pytest
import requests

from password_policy import PolicyLoader, RuleKind, load_policy
from password_policy.wordlist_fetcher import WordListFetcher


POLICY_YAML = """
rules:
  sequential: 4
  min_length: 10
  black_list: {source: blacklist.txt}
  not_in:
    values: [old-password]
    hashed: ["$2y$10$hash"]
messages:
  min_length: "Use at least {value} characters"
"""

BLACKLIST_TXT = """# common passwords
letmein

  password123
"""


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")


@pytest.fixture
def policy_file(tmp_path):
    """Write a policy document and its blacklist next to each other."""
    (tmp_path / "blacklist.txt").write_text(BLACKLIST_TXT, encoding="utf-8")
    path = tmp_path / "policy.yaml"
    path.write_text(POLICY_YAML, encoding="utf-8")
    return path


@pytest.fixture
def fetcher(tmp_path):
    """WordListFetcher caching into a temporary directory."""
    return WordListFetcher(cache_dir=str(tmp_path / "cache"))


@pytest.fixture
def fake_get(monkeypatch):
    """Replace requests.get and record the URIs requested."""
    calls = []
    responses = {}

    def get(uri, timeout=None):
        calls.append(uri)
        return responses[uri]

    monkeypatch.setattr(requests, "get", get)
    get.calls = calls
    get.responses = responses
    return get


class TestPolicyLoader:
    """Test PolicyLoader.load()."""

    def test_load_from_path(self, policy_file):
        """Rules load in document order."""
        rules = PolicyLoader().load(str(policy_file)).rules
        assert rules.kinds() == (
            RuleKind.SEQUENTIAL, RuleKind.MIN_LENGTH, RuleKind.BLACK_LIST, RuleKind.NOT_IN
        )
        assert rules.get(RuleKind.MIN_LENGTH).value == 10

    def test_word_list_source_resolved_relative_to_document(self, policy_file):
        """Relative sources are read from the policy's directory."""
        rules = PolicyLoader().load(str(policy_file)).rules
        assert rules.get(RuleKind.BLACK_LIST).value == ("letmein", "password123")

    def test_not_in_values_and_hashed(self, policy_file):
        """not_in accepts separate values and hashed lists."""
        rule = PolicyLoader().load(str(policy_file)).rules.get(RuleKind.NOT_IN)
        assert rule.value == ("old-password",)
        assert rule.hashed == ("$2y$10$hash",)

    def test_messages_loaded(self, policy_file):
        """Message overrides are returned with the rules."""
        definition = PolicyLoader().load(policy_file)
        assert definition.messages == {"min_length": "Use at least {value} characters"}
        assert definition.source == str(policy_file)

    def test_load_from_file_uri(self, policy_file):
        """file:// URIs are supported."""
        rules = PolicyLoader().load(f"file://{policy_file}").rules
        assert rules.get(RuleKind.BLACK_LIST).value == ("letmein", "password123")

    def test_load_from_dict(self):
        """Parsed documents are accepted directly."""
        rules = PolicyLoader().load({"rules": {"cant_contain": ["acme"]}}).rules
        assert rules.get(RuleKind.CANT_CONTAIN).value == ("acme",)

    def test_empty_document(self, tmp_path):
        """An empty file gives an empty configuration."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert len(PolicyLoader().load(str(path)).rules) == 0

    def test_null_values_allowed(self):
        """Null values load as disabled rules."""
        rules = PolicyLoader().load({"rules": {"min_length": None, "black_list": None}}).rules
        assert rules.get(RuleKind.BLACK_LIST).value == ()

    def test_negative_count_rejected(self):
        """Counts must be non-negative."""
        with pytest.raises(ValueError, match="rules -> min_length"):
            PolicyLoader().load({"rules": {"min_length": -1}})

    def test_unknown_rule_rejected(self):
        """Unknown rule names fail schema validation."""
        with pytest.raises(ValueError, match="bogus"):
            PolicyLoader().load({"rules": {"bogus": 1}})

    def test_wrong_list_type_rejected(self):
        """List rules must be lists of strings or sources."""
        with pytest.raises(ValueError):
            PolicyLoader().load({"rules": {"cant_contain": "acme"}})

    def test_unsupported_scheme(self):
        """Unknown URI schemes are rejected."""
        with pytest.raises(ValueError, match="Unsupported URI scheme"):
            PolicyLoader().load("ftp://example.com/policy.yaml")

    def test_load_policy_helper(self, policy_file):
        """load_policy returns the frozen RuleSet."""
        assert load_policy(str(policy_file)).get(RuleKind.SEQUENTIAL).value == 4

    def test_load_remote_policy(self, fetcher, fake_get):
        """Remote documents are fetched over HTTP."""
        uri = "https://example.com/policy.yaml"
        fake_get.responses[uri] = FakeResponse("rules:\n  min_length: 12\n")
        rules = PolicyLoader(fetcher).load(uri).rules
        assert rules.get(RuleKind.MIN_LENGTH).value == 12


class TestWordListFetcher:
    """Test WordListFetcher."""

    def test_fetch_skips_comments_and_blanks(self, tmp_path, fetcher):
        """Comments and blank lines are not entries."""
        path = tmp_path / "words.txt"
        path.write_text(BLACKLIST_TXT, encoding="utf-8")
        assert fetcher.fetch(str(path)) == ["letmein", "password123"]

    def test_remote_fetch_is_cached(self, fetcher, fake_get):
        """A remote list is requested once and then served from cache."""
        uri = "https://example.com/blacklist.txt"
        fake_get.responses[uri] = FakeResponse("qwerty\n")

        assert fetcher.fetch(uri) == ["qwerty"]
        assert fetcher.fetch(uri) == ["qwerty"]
        assert fake_get.calls == [uri]

    def test_clear_cache(self, fetcher, fake_get):
        """Clearing the cache forces a new request."""
        uri = "https://example.com/blacklist.txt"
        fake_get.responses[uri] = FakeResponse("qwerty\n")

        fetcher.fetch(uri)
        fetcher.clear_cache()
        fetcher.fetch(uri)
        assert fake_get.calls == [uri, uri]

    def test_http_error_raises_runtime_error(self, fetcher, fake_get):
        """HTTP failures surface as RuntimeError."""
        uri = "https://example.com/missing.txt"
        fake_get.responses[uri] = FakeResponse("", status_code=404)
        with pytest.raises(RuntimeError, match="Failed to fetch"):
            fetcher.fetch(uri)

    def test_connection_error_raises_runtime_error(self, fetcher, monkeypatch):
        """Connection failures surface as RuntimeError."""
        def get(uri, timeout=None):
            raise requests.exceptions.ConnectionError("unreachable")

        monkeypatch.setattr(requests, "get", get)
        with pytest.raises(RuntimeError):
            fetcher.fetch("https://example.com/blacklist.txt")
