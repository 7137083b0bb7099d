import base64
import os

import pytest
from kubernetes.config import kube_config

from traceflow_plugin.errors import ConfigurationError
from traceflow_plugin.k8s_tools.k8s_config import k8s_config, load_kubeconfig

KUBECONFIG = """
apiVersion: v1
kind: Config
current-context: dev
contexts:
- name: dev
  context:
    cluster: kind
    user: admin
- name: other
  context:
    cluster: insecure
    user: admin
clusters:
- name: kind
  cluster:
    server: https://127.0.0.1:6443/
    certificate-authority: ca.crt
- name: insecure
  cluster:
    server: https://10.0.0.1:6443
    insecure-skip-tls-verify: true
users:
- name: admin
  user:
    token: secret-token
"""


@pytest.fixture(autouse=True)
def reset_config():
    yield
    k8s_config.reset()


def write(tmp_path, text):
    (tmp_path / "ca.crt").write_text("CA", encoding="utf-8")
    path = tmp_path / "config"
    path.write_text(text, encoding="utf-8")
    return path


def inline_cert_kubeconfig(tmp_path):
    cert = base64.b64encode(b"CERT").decode()
    key = base64.b64encode(b"KEY").decode()
    return write(tmp_path, f"""
current-context: c
contexts:
- name: c
  context: {{cluster: k, user: u}}
clusters:
- name: k
  cluster: {{server: "https://k:6443", certificate-authority-data: "{cert}"}}
users:
- name: u
  user: {{client-certificate-data: "{cert}", client-key-data: "{key}"}}
""")


def test_loads_current_context(tmp_path):
    path = write(tmp_path, KUBECONFIG)

    config = load_kubeconfig(str(path))

    assert config.get_api_url() == "https://127.0.0.1:6443"
    assert config.get_headers() == {"Authorization": "Bearer secret-token"}
    # Relative CA paths resolve against the kubeconfig directory
    assert os.path.samefile(config.get_verify_ssl(), str(tmp_path / "ca.crt"))
    assert config.get_client_cert() is None


def test_explicit_context_and_insecure(tmp_path):
    path = write(tmp_path, KUBECONFIG)

    config = load_kubeconfig(str(path), context="other")

    assert config.get_api_url() == "https://10.0.0.1:6443"
    assert config.get_verify_ssl() is False


def test_reads_path_from_environment(tmp_path, monkeypatch):
    path = write(tmp_path, KUBECONFIG)
    monkeypatch.setenv("KUBECONFIG", str(path))

    assert load_kubeconfig().get_api_url() == "https://127.0.0.1:6443"


def test_token_file(tmp_path):
    (tmp_path / "token").write_text("from-file", encoding="utf-8")
    path = write(tmp_path, KUBECONFIG.replace("token: secret-token", f"tokenFile: {tmp_path / 'token'}"))

    config = load_kubeconfig(str(path))

    assert config.get_headers() == {"Authorization": "Bearer from-file"}


def test_inline_client_certificate(tmp_path):
    path = inline_cert_kubeconfig(tmp_path)

    config = load_kubeconfig(str(path))

    cert_path, key_path = config.get_client_cert()
    with open(cert_path, "rb") as f:
        assert f.read() == b"CERT"
    with open(key_path, "rb") as f:
        assert f.read() == b"KEY"
    assert config.get_headers() == {}


def test_inline_credentials_are_not_rewritten_per_load(tmp_path):
    path = inline_cert_kubeconfig(tmp_path)

    first = load_kubeconfig(str(path)).get_client_cert()
    for _ in range(2):
        assert load_kubeconfig(str(path)).get_client_cert() == first

    # The same files are removed by the exit hook
    kube_config._cleanup_temp_files()
    assert not any(os.path.exists(p) for p in first)


def test_exec_user_without_credentials_is_fatal(tmp_path):
    path = write(tmp_path, KUBECONFIG.replace(
        "token: secret-token",
        "exec: {apiVersion: client.authentication.k8s.io/v1beta1, command: traceflow-no-such-helper}"
    ))

    with pytest.raises(ConfigurationError):
        load_kubeconfig(str(path))
    assert k8s_config.get_api_url() == "http://127.0.0.1:8001"


def test_plain_http_proxy_needs_no_credentials(tmp_path):
    path = write(tmp_path, """
current-context: proxy
contexts:
- name: proxy
  context: {cluster: local}
clusters:
- name: local
  cluster: {server: "http://127.0.0.1:8001"}
""")

    config = load_kubeconfig(str(path))

    assert config.get_api_url() == "http://127.0.0.1:8001"
    assert config.get_headers() == {}


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_kubeconfig(str(tmp_path / "missing"))


def test_malformed_yaml(tmp_path):
    path = write(tmp_path, "clusters: [unclosed")
    with pytest.raises(ConfigurationError):
        load_kubeconfig(str(path))


def test_unknown_context(tmp_path):
    path = write(tmp_path, KUBECONFIG)
    with pytest.raises(ConfigurationError, match="prod"):
        load_kubeconfig(str(path), context="prod")


def test_no_current_context(tmp_path):
    path = write(tmp_path, "apiVersion: v1\nkind: Config\nclusters: []\n")
    with pytest.raises(ConfigurationError, match="current-context"):
        load_kubeconfig(str(path))
