"""Tests for configuration providers.

Covers:
- Flattening nested data into colon-delimited keys
- JSON and YAML file loading, optional and missing files
- Environment variable prefixes and nesting
- Chained providers and their inner provider lists
"""

import pathlib as _pathlib

import pytest as _pytest

import confviz.config as config
import confviz.config.providers as providers


class TestFlattenData:
    """flatten_data turns nested structures into flat keys."""

    def test_nested_mappings_and_lists(self) -> None:
        data = {"Db": {"Port": 5432, "Hosts": ["a", "b"]}}
        assert dict(providers.flatten_data(data)) == {
            "Db:Port": "5432",
            "Db:Hosts:0": "a",
            "Db:Hosts:1": "b",
        }

    def test_scalars_use_configuration_strings(self) -> None:
        data = {"Enabled": True, "Disabled": False, "Missing": None}
        assert dict(providers.flatten_data(data)) == {
            "Enabled": "true",
            "Disabled": "false",
            "Missing": "",
        }

    def test_empty_containers_produce_no_keys(self) -> None:
        assert list(providers.flatten_data({"A": {}, "B": []})) == []


class TestMemoryProvider:
    """In-memory provider behaviour shared by every provider."""

    def test_lookup_is_case_insensitive(self) -> None:
        provider = providers.MemoryConfigurationProvider({"Db": {"Host": "x"}})
        provider.load()
        assert provider.try_get("db:HOST") == "x"
        assert provider.try_get("Db:Port") is None

    def test_child_keys(self) -> None:
        provider = providers.MemoryConfigurationProvider({"Db": {"Host": "x", "Port": 1}})
        provider.load()
        assert provider.get_child_keys() == ["Db"]
        assert provider.get_child_keys("Db") == ["Host", "Port"]

    def test_kind_and_display_name(self) -> None:
        provider = providers.MemoryConfigurationProvider()
        assert provider.kind is providers.ProviderKind.GENERIC
        assert provider.display_name == "MemoryConfigurationProvider"


class TestFileProviders:
    """JSON and YAML file providers."""

    def test_json_file(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / "appsettings.json").write_text('{"Logging": {"Level": "Info"}}')
        provider = providers.JsonConfigurationProvider("appsettings.json", base_path=tmp_path)
        provider.load()
        assert provider.kind is providers.ProviderKind.FILE
        assert provider.try_get("Logging:Level") == "Info"
        assert provider.full_path == tmp_path / "appsettings.json"
        assert provider.exists

    def test_yaml_file(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / "config.yaml").write_text("Db:\n  Port: 5432\n  Ssl: true\n")
        provider = providers.YamlConfigurationProvider("config.yaml", base_path=tmp_path)
        provider.load()
        assert provider.try_get("Db:Port") == "5432"
        assert provider.try_get("Db:Ssl") == "true"

    def test_empty_yaml_file_loads_nothing(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / "empty.yaml").write_text("")
        provider = providers.YamlConfigurationProvider("empty.yaml", base_path=tmp_path)
        provider.load()
        assert provider.get_child_keys() == []

    def test_missing_optional_file_is_empty(self, tmp_path: _pathlib.Path) -> None:
        provider = providers.JsonConfigurationProvider(
            "missing.json", base_path=tmp_path, optional=True
        )
        provider.load()
        assert not provider.exists
        assert provider.get_child_keys() == []

    def test_missing_required_file_raises(self, tmp_path: _pathlib.Path) -> None:
        provider = providers.JsonConfigurationProvider("missing.json", base_path=tmp_path)
        with _pytest.raises(providers.ConfigFileError, match="not found"):
            provider.load()

    def test_malformed_json_raises(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / "bad.json").write_text("{not json")
        provider = providers.JsonConfigurationProvider("bad.json", base_path=tmp_path)
        with _pytest.raises(providers.ConfigFileError, match="invalid JSON"):
            provider.load()

    def test_malformed_yaml_raises(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / "bad.yaml").write_text("key: [unclosed")
        provider = providers.YamlConfigurationProvider("bad.yaml", base_path=tmp_path)
        with _pytest.raises(providers.ConfigFileError, match="invalid YAML"):
            provider.load()

    def test_top_level_list_raises(self, tmp_path: _pathlib.Path) -> None:
        (tmp_path / "list.yaml").write_text("- a\n- b\n")
        provider = providers.YamlConfigurationProvider("list.yaml", base_path=tmp_path)
        with _pytest.raises(providers.ConfigFileError, match="mapping"):
            provider.load()


class TestEnvironmentProvider:
    """Environment variable provider."""

    def test_prefix_is_stripped_and_nesting_applied(self) -> None:
        provider = providers.EnvironmentVariablesConfigurationProvider(
            "APP_",
            environ={"APP_Db__Port": "5432", "OTHER": "x"},
        )
        provider.load()
        assert provider.try_get("Db:Port") == "5432"
        assert provider.try_get("OTHER") is None
        assert provider.prefix == "APP_"
        assert not provider.is_global

    def test_prefix_matches_case_insensitively(self) -> None:
        provider = providers.EnvironmentVariablesConfigurationProvider(
            "app_", environ={"APP_Name": "billing"}
        )
        provider.load()
        assert provider.try_get("Name") == "billing"

    def test_no_prefix_is_global(self) -> None:
        provider = providers.EnvironmentVariablesConfigurationProvider(
            environ={"PATH": "/usr/bin", "Db__Port": "1"}
        )
        provider.load()
        assert provider.is_global
        assert provider.prefix == ""
        assert provider.kind is providers.ProviderKind.ENVIRONMENT
        assert provider.try_get("Db:Port") == "1"

    def test_reads_process_environment_by_default(
        self,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("CVTEST_Feature__Enabled", "true")
        provider = providers.EnvironmentVariablesConfigurationProvider("CVTEST_")
        provider.load()
        assert provider.try_get("Feature:Enabled") == "true"


class TestChainedProvider:
    """Chained provider over another configuration object."""

    def test_root_exposes_inner_providers(self) -> None:
        inner = config.ConfigurationBuilder().add_in_memory_collection({"A": "1"}).build()
        chained = providers.ChainedConfigurationProvider(inner)
        assert chained.kind is providers.ProviderKind.CHAINED
        assert chained.get_inner_providers() == list(inner.providers)
        assert chained.try_get("A") == "1"

    def test_section_is_opaque_but_answers_lookups(self) -> None:
        inner = (
            config.ConfigurationBuilder()
            .add_in_memory_collection({"Outer": {"A": "1"}})
            .build()
        )
        chained = providers.ChainedConfigurationProvider(inner.get_section("Outer"))
        assert chained.get_inner_providers() is None
        assert chained.try_get("A") == "1"
        assert chained.get_child_keys() == ["A"]
