import json

import pytest

ADDRESS = "0x" + "ab" * 20


def make_envelope(source_code, contract_name="Token", status="1", message="OK", **extra):
    entry = {
        "SourceCode": source_code,
        "ABI": "[]",
        "ContractName": contract_name,
        "CompilerVersion": "v0.8.20+commit.a1b79de6",
        "OptimizationUsed": "1",
        "Runs": "200",
        "EVMVersion": "Default",
        "LicenseType": "MIT",
    }
    entry.update(extra)
    return json.dumps({"status": status, "message": message, "result": [entry]})


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code


class FakeGet:
    """Stands in for requests.get and records every call."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def __call__(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


class FakeRun:
    """Stands in for subprocess.run when forge init is invoked."""

    def __init__(self, returncode=0, stderr="", create_template=True):
        self.returncode = returncode
        self.stderr = stderr
        self.create_template = create_template
        self.calls = []

    def __call__(self, command, cwd=None, capture_output=False, text=False):
        existing = sorted(str(p.relative_to(cwd)) for p in cwd.rglob("*")) if cwd else []
        self.calls.append({"command": command, "cwd": cwd, "existing": existing})
        if self.create_template and self.returncode == 0:
            for relative in ("src/Counter.sol", "test/Counter.t.sol", "script/Counter.s.sol"):
                path = cwd / relative
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text("// template\n")
            (cwd / "foundry.toml").write_text('[profile.default]\nsrc = "src"\n')

        class Completed:
            pass

        completed = Completed()
        completed.returncode = self.returncode
        completed.stdout = ""
        completed.stderr = self.stderr
        return completed


@pytest.fixture
def fake_get(monkeypatch):
    def install(response=None, error=None):
        fake = FakeGet(response, error)
        monkeypatch.setattr("contract_cloner.clients.explorer.requests.get", fake)
        return fake

    return install


@pytest.fixture
def fake_run(monkeypatch):
    def install(**kwargs):
        fake = FakeRun(**kwargs)
        monkeypatch.setattr("contract_cloner.materialize.project.subprocess.run", fake)
        return fake

    return install


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("ETHERSCAN_API_KEY", "BASESCAN_API_KEY", "CLONER_TIMEOUT", "FORGE_BIN"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
