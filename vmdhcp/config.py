"""Runtime options for the controller, agent and webhook, and image references."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_NETWORK_INTERFACE = "eth1"
DEFAULT_IMAGE_TAG = "latest"
DEFAULT_SERVICE_CIDR = "10.53.0.0/16"
DEFAULT_CONTROLLER_USERNAME = "harvester-vm-dhcp-controller"
DEFAULT_GC_USERNAME = "system:serviceaccount:kube-system:generic-garbage-collector"
DEFAULT_HTTPS_PORT = 8443
DEFAULT_WEBHOOK_THREADINESS = 5


class ImageParseError(ValueError):
    """Raised when a container image reference cannot be split into name and tag."""


@dataclass(frozen=True)
class Image:
    """A container image as repository and tag."""

    repository: str
    tag: str

    def __str__(self) -> str:
        return f"{self.repository}:{self.tag}"


@dataclass(frozen=True)
class NamespacedName:
    """A namespace and name pair identifying a namespaced resource."""

    namespace: str = ""
    name: str = ""

    @classmethod
    def parse(cls, ref: str) -> NamespacedName:
        """Split ``namespace/name`` at the last slash; without one, the namespace is empty."""
        namespace, sep, name = ref.rpartition("/")
        if not sep:
            return cls(namespace="", name=ref.strip())
        return cls(namespace=namespace.strip(), name=name.strip())

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass
class ControllerOptions:
    """Settings the controller applies to the agents it spawns."""

    no_agent: bool = False
    agent_namespace: str = ""
    agent_image: Optional[Image] = None
    agent_service_account_name: str = ""
    no_dhcp: bool = False


@dataclass
class AgentOptions:
    """Settings of a DHCP agent bound to one IPPool."""

    dry_run: bool = False
    nic: str = DEFAULT_NETWORK_INTERFACE
    kube_config_path: str = ""
    kube_context: str = ""
    ippool_ref: NamespacedName = field(default_factory=NamespacedName)


@dataclass
class WebhookOptions:
    """Settings of the admission webhook server."""

    name: str = ""
    service_cidr: str = DEFAULT_SERVICE_CIDR
    controller_username: str = DEFAULT_CONTROLLER_USERNAME
    garbage_collection_username: str = DEFAULT_GC_USERNAME
    namespace: str = ""
    https_listen_port: int = DEFAULT_HTTPS_PORT
    threadiness: int = DEFAULT_WEBHOOK_THREADINESS


def parse_image_name_and_tag(image: str) -> Image:
    """Split an image reference into repository and tag, defaulting the tag to "latest"."""
    idx = image.rfind(":")
    if idx == -1:
        return Image(image, DEFAULT_IMAGE_TAG)
    if idx == len(image) - 1:
        raise ImageParseError("invalid image name: colon without tag")
    if image.count(":") > 2:
        raise ImageParseError("invalid image name: multiple colons found")
    if idx <= image.rfind("/"):
        # The colon belongs to a registry port, not a tag.
        return Image(image, DEFAULT_IMAGE_TAG)
    return Image(image[:idx], image[idx + 1:])