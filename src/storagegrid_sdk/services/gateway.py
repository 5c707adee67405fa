"""Load balancer endpoint (gateway config) service (grid management API)."""

from typing import Protocol

from pydantic import Field

from ..types import APIModel, Response
from .base import HTTPClient

GATEWAY_CONFIG_ENDPOINT = "/private/gateway-configs"
SERVER_CONFIG_ENDPOINT = GATEWAY_CONFIG_ENDPOINT + "/{gateway_id}/server-config"


def _server_config_endpoint(gateway_id: str) -> str:
    return SERVER_CONFIG_ENDPOINT.format(gateway_id=gateway_id)


class NodeInterface(APIModel):
    node_id: str | None = None
    interface: str | None = None


class PinTargets(APIModel):
    """Restricts which HA groups, interfaces or node types serve the endpoint."""

    ha_groups: list[str] | None = None
    node_interfaces: list[NodeInterface] | None = None
    node_types: list[str] | None = None


class ManagementInterfaces(APIModel):
    enable_grid_manager: bool | None = None
    enable_tenant_manager: bool | None = None


class GatewayConfig(APIModel):
    """A load balancer endpoint."""

    id: str = ""
    display_name: str | None = None
    port: int | None = None
    account_id: str | None = None
    secure: bool | None = None
    enable_ipv4: bool | None = Field(default=None, alias="enableIPv4")
    enable_ipv6: bool | None = Field(default=None, alias="enableIPv6")
    pin_targets: PinTargets | None = None
    management_interfaces: ManagementInterfaces | None = None
    closed_on_untrusted_client_network: bool | None = None


class FingerPrints(APIModel):
    sha1: str | None = Field(default=None, alias="SHA-1")
    sha256: str | None = Field(default=None, alias="SHA-256")


class CertificateDetails(APIModel):
    subject: str | None = None
    issuer: str | None = None
    serial_number: str | None = None
    not_before: str | None = None
    not_after: str | None = None
    finger_prints: FingerPrints | None = None
    subject_alt_names: list[str] | None = None
    key_usage: str | None = None


class CertificateMetadata(APIModel):
    server_certificate_details: CertificateDetails | None = None
    ca_bundle_details: list[CertificateDetails] | None = None


class PlaintextCertData(APIModel):
    server_certificate_encoded: str | None = None
    ca_bundle_encoded: str | None = None
    metadata: CertificateMetadata | None = None


class ServerConfig(APIModel):
    """Service type, account restrictions and certificate of an endpoint."""

    default_service_type: str | None = None
    account_restriction_mode: str | None = None
    account_restrictions: list[str] | None = None
    cert_source: str | None = None
    plaintext_cert_data: PlaintextCertData | None = None


class GatewayConfigServiceProtocol(Protocol):
    def list_configs(self) -> list[GatewayConfig]: ...

    def get_config_by_id(self, gateway_id: str) -> GatewayConfig: ...

    def create_config(self, config: GatewayConfig) -> GatewayConfig: ...

    def update_config(self, config: GatewayConfig) -> GatewayConfig: ...

    def delete_config(self, gateway_id: str) -> None: ...

    def get_server_config(self, gateway_id: str) -> ServerConfig: ...

    def update_server_config(
        self, gateway_id: str, server_config: ServerConfig
    ) -> ServerConfig: ...


class GatewayConfigService:
    """Manage load balancer endpoints and their server configuration."""

    def __init__(self, client: HTTPClient):
        self._client = client

    def list_configs(self) -> list[GatewayConfig]:
        response = self._client.do_parsed(
            "GET", GATEWAY_CONFIG_ENDPOINT, output=Response[list[GatewayConfig]]
        )
        return response.data

    def get_config_by_id(self, gateway_id: str) -> GatewayConfig:
        response = self._client.do_parsed(
            "GET",
            f"{GATEWAY_CONFIG_ENDPOINT}/{gateway_id}",
            output=Response[GatewayConfig],
        )
        return response.data

    def create_config(self, config: GatewayConfig) -> GatewayConfig:
        response = self._client.do_parsed(
            "POST", GATEWAY_CONFIG_ENDPOINT, config, output=Response[GatewayConfig]
        )
        return response.data

    def update_config(self, config: GatewayConfig) -> GatewayConfig:
        if not config.id:
            msg = "gateway config id is required for update"
            raise ValueError(msg)
        response = self._client.do_parsed(
            "PUT",
            f"{GATEWAY_CONFIG_ENDPOINT}/{config.id}",
            config,
            output=Response[GatewayConfig],
        )
        return response.data

    def delete_config(self, gateway_id: str) -> None:
        self._client.do_parsed("DELETE", f"{GATEWAY_CONFIG_ENDPOINT}/{gateway_id}")

    def get_server_config(self, gateway_id: str) -> ServerConfig:
        response = self._client.do_parsed(
            "GET", _server_config_endpoint(gateway_id), output=Response[ServerConfig]
        )
        return response.data

    def update_server_config(
        self,
        gateway_id: str,
        server_config: ServerConfig,
    ) -> ServerConfig:
        response = self._client.do_parsed(
            "PUT",
            _server_config_endpoint(gateway_id),
            server_config,
            output=Response[ServerConfig],
        )
        return response.data
