import pytest

from contract_cloner.errors import InitFailed, PathExists
from contract_cloner.materialize import build_remappings, materialize
from contract_cloner.models import ContractMetadata, SourceFile


def _files():
    return [
        SourceFile(relative_path="Token.sol", contents="contract Token {}\n"),
        SourceFile(relative_path="contracts/lib/Math.sol", contents="library Math {}\n"),
    ]


def _snapshot(root):
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def test_writes_sources_under_src(tmp_path):
    destination = tmp_path / "project"
    written = materialize(_files(), destination, init=False)

    assert written == [
        destination / "src" / "Token.sol",
        destination / "src" / "contracts" / "lib" / "Math.sol",
    ]
    assert (destination / "src" / "contracts" / "lib" / "Math.sol").read_text() == "library Math {}\n"
    assert (destination / "remappings.txt").read_text() == "contracts/=src/contracts/\n"


def test_existing_non_empty_destination_is_refused(tmp_path):
    destination = tmp_path / "project"
    destination.mkdir()
    (destination / "keep.txt").write_text("mine")

    with pytest.raises(PathExists):
        materialize(_files(), destination, init=False)

    assert sorted(p.name for p in destination.iterdir()) == ["keep.txt"]


def test_existing_file_destination_is_refused(tmp_path):
    destination = tmp_path / "project"
    destination.write_text("file")
    with pytest.raises(PathExists):
        materialize(_files(), destination, init=False)


def test_existing_empty_destination_is_used(tmp_path):
    destination = tmp_path / "project"
    destination.mkdir()
    materialize(_files(), destination, init=False)
    assert (destination / "src" / "Token.sol").is_file()


def test_output_is_deterministic(tmp_path):
    first, second = tmp_path / "one", tmp_path / "two"
    metadata = ContractMetadata(remappings=["@oz/=lib/oz/"])
    materialize(_files(), first, init=False, metadata=metadata)
    materialize(_files(), second, init=False, metadata=metadata)
    assert _snapshot(first) == _snapshot(second)


def test_forge_init_runs_in_destination_and_template_is_removed(tmp_path, fake_run):
    run = fake_run()
    destination = tmp_path / "project"

    materialize(_files(), destination, forge_binary="/opt/forge")

    assert run.calls[0]["command"] == ["/opt/forge", "init", "--no-commit", "."]
    assert run.calls[0]["cwd"] == destination
    assert not (destination / "src" / "Counter.sol").exists()
    assert not (destination / "test" / "Counter.t.sol").exists()
    assert not (destination / "script" / "Counter.s.sol").exists()
    assert (destination / "src" / "Token.sol").read_text() == "contract Token {}\n"


def test_fetched_counter_file_survives_forge_template(tmp_path, fake_run):
    run = fake_run()
    destination = tmp_path / "project"
    files = [SourceFile(relative_path="Counter.sol", contents="contract Counter { uint x; }")]

    written = materialize(files, destination)

    assert written == [destination / "src" / "Counter.sol"]
    assert (destination / "src" / "Counter.sol").read_text() == "contract Counter { uint x; }"
    assert not (destination / "test" / "Counter.t.sol").exists()
    assert run.calls[0]["existing"] == []


def test_sources_are_written_after_forge_init(tmp_path, fake_run):
    run = fake_run()
    destination = tmp_path / "project"

    materialize(_files(), destination)

    assert len(run.calls) == 1
    assert run.calls[0]["existing"] == []
    assert (destination / "foundry.toml").is_file()
    assert (destination / "src" / "contracts" / "lib" / "Math.sol").is_file()
    assert (destination / "remappings.txt").read_text() == "contracts/=src/contracts/\n"


def test_init_failure_is_reported_without_rollback(tmp_path, fake_run):
    fake_run(returncode=1, stderr="Error: something broke\n")
    destination = tmp_path / "project"

    with pytest.raises(InitFailed) as excinfo:
        materialize(_files(), destination)

    assert excinfo.value.code == 1
    assert excinfo.value.detail == "Error: something broke"
    assert excinfo.value.exit_code == 7
    assert destination.is_dir()
    assert not (destination / "src" / "Token.sol").exists()


def test_missing_forge_binary(tmp_path, monkeypatch):
    def missing(*args, **kwargs):
        raise FileNotFoundError("forge")

    monkeypatch.setattr("contract_cloner.materialize.project.subprocess.run", missing)
    with pytest.raises(InitFailed) as excinfo:
        materialize(_files(), tmp_path / "project")
    assert excinfo.value.code == 127


def test_build_remappings():
    files = [
        SourceFile(relative_path="@openzeppelin/contracts/ERC20.sol", contents=""),
        SourceFile(relative_path="contracts/Token.sol", contents=""),
        SourceFile(relative_path="Flat.sol", contents=""),
    ]
    assert build_remappings(files, ["@openzeppelin/=./lib/oz/", "broken"]) == [
        "@openzeppelin/=src/lib/oz/",
        "contracts/=src/contracts/",
    ]


def test_no_remappings_for_top_level_files(tmp_path):
    destination = tmp_path / "project"
    materialize([SourceFile(relative_path="A.sol", contents="")], destination, init=False)
    assert not (destination / "remappings.txt").exists()
