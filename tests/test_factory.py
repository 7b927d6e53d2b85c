import pytest

from force_transport import (
    BaseTransport,
    CanvasTransport,
    HttpProxyTransport,
    JsonpTransport,
    ProxyTransport,
    TransportOptions,
    create_transport,
)

SIGNED = {"client": {"oauthToken": "token", "instanceUrl": "https://na1.salesforce.com"}}


def test_canvas_takes_precedence() -> None:
    transport = create_transport(signed_request=SIGNED, proxy_url="https://px.example.com/proxy")
    assert isinstance(transport, CanvasTransport)
    assert transport.signed_request["client"]["oauthToken"] == "token"


def test_proxy_selection_order() -> None:
    proxy = create_transport(
        proxy_url="https://px.example.com/proxy",
        http_proxy="http://squid:3128",
        base_url="",
    )
    assert isinstance(proxy, ProxyTransport)
    assert proxy.proxy_url == "https://px.example.com/proxy"

    http_proxy = create_transport(http_proxy="http://squid:3128", jsonp_param="callback", base_url="")
    assert isinstance(http_proxy, HttpProxyTransport)

    jsonp = create_transport(jsonp_param="callback")
    assert isinstance(jsonp, JsonpTransport)

    assert isinstance(create_transport(), BaseTransport)


def test_options_from_env() -> None:
    options = TransportOptions.from_env(
        {
            "FORCE_PROXY_URL": "https://px.example.com/proxy",
            "FORCE_TIMEOUT": "12.5",
            "FORCE_LOG_LEVEL": "DEBUG",
        },
        base_url="https://org.salesforce.com",
    )
    assert options.proxy_url == "https://px.example.com/proxy"
    assert options.http_proxy is None
    assert options.timeout == 12.5
    assert options.log_level == "debug"

    transport = create_transport(options)
    assert isinstance(transport, ProxyTransport)
    assert transport.base_url == "https://org.salesforce.com"


@pytest.mark.parametrize(
    "environ",
    [
        {"FORCE_TIMEOUT": "soon"},
        {"FORCE_LOG_LEVEL": "loud"},
    ],
)
def test_options_from_env_rejects_bad_values(environ: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        TransportOptions.from_env(environ)
