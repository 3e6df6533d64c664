from importlib.metadata import PackageNotFoundError

import infra.utils.version as version_module


def test_get_version_reads_installed_distribution(monkeypatch) -> None:
    requested: list[str] = []

    def fake_version(name: str) -> str:
        requested.append(name)
        return "2.3.4"

    monkeypatch.setattr(version_module, "version", fake_version)

    assert version_module.get_version() == "2.3.4"
    assert requested == ["uptime-checker"]


def test_get_version_falls_back_when_not_installed(monkeypatch) -> None:
    def missing_version(name: str) -> str:
        raise PackageNotFoundError(name)

    monkeypatch.setattr(version_module, "version", missing_version)

    assert version_module.get_version() == version_module.DEFAULT_VERSION
