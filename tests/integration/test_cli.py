import json
import pytest
import yaml
from click.testing import CliRunner
from marco_docker.CLI import main as cli_main
from marco_docker.CLI.main import cli
from marco_docker.exceptions import AcquisitionError, TransportError
from marco_docker.MODELS.container_snapshot import ContainerSnapshot, PortBinding

SNAPSHOTS = [
    ContainerSnapshot(id="c1", env=["DOMAIN=example.com"],
                      ports={"80/tcp": [PortBinding(host_ip="0.0.0.0", host_port="8000")]}),
    ContainerSnapshot(id="c2", env=["DOMAIN=example.com"],
                      ports={"80/tcp": [PortBinding(host_ip="0.0.0.0", host_port="8001")]}),
]

class FakeSource:
    instances = []
    error = None

    def __init__(self, endpoint, timeout=30.0):
        self.endpoint = endpoint
        self.timeout = timeout
        FakeSource.instances.append(self)

    def snapshots(self):
        if FakeSource.error:
            raise FakeSource.error
        return list(SNAPSHOTS)

class FakeClient:
    sent = []
    error = None

    def __init__(self, timeout=30.0):
        self.timeout = timeout

    def send(self, backends, url):
        if FakeClient.error:
            raise FakeClient.error
        FakeClient.sent.append((backends, url))

@pytest.fixture(autouse=True)
def fakes(monkeypatch):
    FakeSource.instances = []
    FakeSource.error = None
    FakeClient.sent = []
    FakeClient.error = None
    monkeypatch.setattr(cli_main, "DockerContainerSource", FakeSource)
    monkeypatch.setattr(cli_main, "MarcoClient", FakeClient)
    for var in ("MARCO_ECS_URL", "DOCKER_HOST", "MARCO_DOCKER_PORTS", "MARCO_DOCKER_ENV",
                "MARCO_ECS_FREQUENCY", "MARCO_DOCKER_MATCH", "MARCO_DOCKER_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)

def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    assert 'push Docker backends to Marco' in result.output
    assert '--ports' in result.output

def test_show_json():
    runner = CliRunner()
    result = runner.invoke(cli, ['show'])
    assert result.exit_code == 0
    assert json.loads(result.output) == [{
        "type": "docker",
        "domain": "example.com",
        "list": ["http://127.0.0.1:8000", "http://127.0.0.1:8001"],
    }]
    assert FakeClient.sent == []

def test_show_yaml():
    runner = CliRunner()
    result = runner.invoke(cli, ['show', '--format', 'yaml'])
    assert result.exit_code == 0
    assert yaml.safe_load(result.output)[0]['domain'] == 'example.com'

def test_show_filtered_by_ports():
    runner = CliRunner()
    result = runner.invoke(cli, ['--ports', '443', 'show'])
    assert result.exit_code == 0
    assert json.loads(result.output) == []

def test_push():
    runner = CliRunner()
    result = runner.invoke(cli, ['--marco', 'http://marco:81', 'push'])
    assert result.exit_code == 0
    assert 'Pushed 1 domains to http://marco:81.' in result.output
    backends, url = FakeClient.sent[0]
    assert url == 'http://marco:81'
    assert backends[0].list == ["http://127.0.0.1:8000", "http://127.0.0.1:8001"]

def test_push_empty_mapping_fails():
    runner = CliRunner()
    result = runner.invoke(cli, ['--env', 'VIRTUAL_HOST', 'push'])
    assert result.exit_code == 1
    assert 'Empty list of environments.' in result.output
    assert FakeClient.sent == []

def test_push_transport_error():
    FakeClient.error = TransportError("connection refused")
    runner = CliRunner()
    result = runner.invoke(cli, ['push'])
    assert result.exit_code == 1
    assert 'connection refused' in result.output

def test_show_acquisition_error():
    FakeSource.error = AcquisitionError("Cannot connect to Docker")
    runner = CliRunner()
    result = runner.invoke(cli, ['show'])
    assert result.exit_code == 1
    assert 'Cannot connect to Docker' in result.output

def test_environment_overrides_defaults():
    runner = CliRunner()
    result = runner.invoke(cli, ['show'], env={'DOCKER_HOST': 'tcp://docker:2375',
                                               'MARCO_DOCKER_TIMEOUT': '5'})
    assert result.exit_code == 0
    assert FakeSource.instances[0].endpoint == 'tcp://docker:2375'
    assert FakeSource.instances[0].timeout == 5.0

def test_config_file(tmp_path):
    config = tmp_path / "marco.yml"
    config.write_text("endpoint: tcp://from-file:2375\nports: [443]\n")
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(config), 'show'])
    assert result.exit_code == 0
    assert json.loads(result.output) == []
    assert FakeSource.instances[0].endpoint == 'tcp://from-file:2375'

def test_flag_beats_config_file(tmp_path):
    config = tmp_path / "marco.yml"
    config.write_text("ports: '443'\n")
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(config), '--ports', '80', 'show'])
    assert result.exit_code == 0
    assert len(json.loads(result.output)) == 1

def test_invalid_frequency():
    runner = CliRunner()
    result = runner.invoke(cli, ['--frequency', '0', 'show'])
    assert result.exit_code == 2
    assert 'Invalid configuration' in result.output

def test_bad_config_file(tmp_path):
    config = tmp_path / "marco.yml"
    config.write_text("colour: blue\n")
    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(config), 'show'])
    assert result.exit_code == 2
    assert 'Unknown config keys' in result.output

def test_environment_variables_configure_push():
    runner = CliRunner()
    result = runner.invoke(cli, ['push'], env={'MARCO_ECS_URL': 'http://marco:81',
                                               'MARCO_DOCKER_PORTS': '80',
                                               'MARCO_DOCKER_ENV': 'DOMAIN',
                                               'MARCO_ECS_FREQUENCY': '60',
                                               'MARCO_DOCKER_MATCH': 'exact'})
    assert result.exit_code == 0
    assert FakeClient.sent[0][1] == 'http://marco:81'

def test_exact_match_from_environment():
    runner = CliRunner()
    result = runner.invoke(cli, ['show'], env={'MARCO_DOCKER_PORTS': '8080',
                                               'MARCO_DOCKER_MATCH': 'exact'})
    assert result.exit_code == 0
    assert json.loads(result.output) == []
