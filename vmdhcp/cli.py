"""Command-line option parsing for the controller, agent and webhook commands."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from vmdhcp.config import (
    DEFAULT_CONTROLLER_USERNAME,
    DEFAULT_GC_USERNAME,
    DEFAULT_HTTPS_PORT,
    DEFAULT_NETWORK_INTERFACE,
    DEFAULT_SERVICE_CIDR,
    DEFAULT_WEBHOOK_THREADINESS,
    AgentOptions,
    ControllerOptions,
    NamespacedName,
    WebhookOptions,
    parse_image_name_and_tag,
)

APP_VERSION = "dev"

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid boolean value {text!r}")


def _flag_bool(text: str) -> bool:
    try:
        return _parse_bool(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    value = environ.get(name)
    if value is None:
        return default
    try:
        return _parse_bool(value)
    except ValueError:
        return default


def env_bool(name: str, default: bool) -> bool:
    """Read a boolean environment variable, falling back to ``default`` when unset or invalid."""
    return _env_bool(os.environ, name, default)


@dataclass(frozen=True)
class _RunFlags:
    """Settings of a command run that are not part of its component options."""

    name: str = ""
    debug: bool = False
    trace: bool = False
    enable_cache_dump_api: bool = False
    no_leader_election: bool = False

    @property
    def log_level(self) -> str:
        if self.trace:
            return "trace"
        if self.debug:
            return "debug"
        return "info"


def _add_bool(parser: argparse.ArgumentParser, flag: str, default: bool, help_text: str) -> None:
    parser.add_argument(
        flag,
        nargs="?",
        const=True,
        default=default,
        type=_flag_bool,
        metavar="BOOL",
        help=help_text,
    )


def _new_parser(
    prog: str, description: str, environ: Mapping[str, str], env_prefix: str
) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument("--version", action="version", version=f"{prog} version {APP_VERSION}")
    _add_bool(
        parser,
        "--debug",
        _env_bool(environ, f"{env_prefix}_DEBUG", False),
        "set logging level to debug",
    )
    _add_bool(
        parser,
        "--trace",
        _env_bool(environ, f"{env_prefix}_TRACE", False),
        "set logging level to trace",
    )
    return parser


def _resolve(argv: Optional[Sequence[str]], environ: Optional[Mapping[str, str]]):
    args = list(sys.argv[1:] if argv is None else argv)
    env = os.environ if environ is None else environ
    return args, env


def build_controller_options(argv=None, environ=None) -> tuple[ControllerOptions, _RunFlags]:
    """Parse the controller's arguments into its options and run flags."""
    args, env = _resolve(argv, environ)
    parser = _new_parser(
        "vm-dhcp-controller",
        "The VM DHCP controller generates agents based on the IPPool objects defined "
        "in the cluster and coordinates the VirtualMachineNetworkConfig objects so that "
        "agents convert them into valid DHCP leases.",
        env,
        "VM_DHCP_CONTROLLER",
    )
    parser.add_argument(
        "--name",
        default=env.get("VM_DHCP_CONTROLLER_NAME", ""),
        help="The name of the vm-dhcp-controller instance",
    )
    _add_bool(parser, "--no-leader-election", False,
              "Run vm-dhcp-controller with leader-election disabled")
    _add_bool(parser, "--no-agent", False, "Run vm-dhcp-controller without spawning agents")
    _add_bool(parser, "--enable-cache-dump-api", False, "Enable cache dump APIs")
    _add_bool(parser, "--no-dhcp", False, "Disable DHCP server on the spawned agents")
    parser.add_argument(
        "--namespace",
        default=env.get("AGENT_NAMESPACE", ""),
        help="The namespace for the spawned agents",
    )
    parser.add_argument(
        "--image",
        default=env.get("AGENT_IMAGE", ""),
        help="The container image for the spawned agents",
    )
    parser.add_argument(
        "--service-account-name",
        default=env.get("AGENT_SERVICE_ACCOUNT_NAME", ""),
        help="The service account for the spawned agents",
    )
    ns = parser.parse_args(args)

    options = ControllerOptions(
        no_agent=ns.no_agent,
        agent_namespace=ns.namespace,
        agent_image=parse_image_name_and_tag(ns.image),
        agent_service_account_name=ns.service_account_name,
        no_dhcp=ns.no_dhcp,
    )
    flags = _RunFlags(
        name=ns.name,
        debug=ns.debug,
        trace=ns.trace,
        enable_cache_dump_api=ns.enable_cache_dump_api,
        no_leader_election=ns.no_leader_election,
    )
    return options, flags


def build_agent_options(argv=None, environ=None) -> tuple[AgentOptions, _RunFlags]:
    """Parse the agent's arguments into its options and run flags."""
    args, env = _resolve(argv, environ)
    parser = _new_parser("vm-dhcp-agent", "VM DHCP Agent", env, "VM_DHCP_AGENT")
    parser.add_argument(
        "--name",
        default=env.get("VM_DHCP_AGENT_NAME", ""),
        help="The name of the vm-dhcp-agent instance",
    )
    parser.add_argument(
        "--kubeconfig",
        default=env.get("KUBECONFIG", ""),
        help="Path to the kubeconfig file",
    )
    parser.add_argument(
        "--kubecontext",
        default=env.get("KUBECONTEXT", ""),
        help="Context name",
    )
    _add_bool(parser, "--dry-run", False, "Run vm-dhcp-agent without starting the DHCP server")
    _add_bool(parser, "--enable-cache-dump-api", False, "Enable cache dump APIs")
    parser.add_argument(
        "--ippool-ref",
        default=env.get("IPPOOL_REF", ""),
        help="The IPPool object the agent should sync with",
    )
    parser.add_argument(
        "--nic",
        default=DEFAULT_NETWORK_INTERFACE,
        help="The network interface the embedded DHCP server listens on",
    )
    ns = parser.parse_args(args)

    options = AgentOptions(
        dry_run=ns.dry_run,
        nic=ns.nic,
        kube_config_path=ns.kubeconfig,
        kube_context=ns.kubecontext,
        ippool_ref=NamespacedName.parse(ns.ippool_ref),
    )
    flags = _RunFlags(
        name=ns.name,
        debug=ns.debug,
        trace=ns.trace,
        enable_cache_dump_api=ns.enable_cache_dump_api,
    )
    return options, flags


def build_webhook_options(argv=None, environ=None) -> tuple[WebhookOptions, _RunFlags]:
    """Parse the webhook's arguments into its options and run flags."""
    args, env = _resolve(argv, environ)
    parser = _new_parser("vm-dhcp-webhook", "VM DHCP Webhook", env, "VM_DHCP_WEBHOOK")
    parser.add_argument(
        "--name",
        default=env.get("VM_DHCP_AGENT_NAME", ""),
        help="The name of the vm-dhcp-webhook instance",
    )
    parser.add_argument(
        "--service-cidr",
        default=DEFAULT_SERVICE_CIDR,
        help="The service CIDR that the cluster is currently using",
    )
    parser.add_argument(
        "--controller-user",
        default=DEFAULT_CONTROLLER_USERNAME,
        help="The harvester controller username",
    )
    parser.add_argument(
        "--gc-user",
        default=DEFAULT_GC_USERNAME,
        help="The system username that performs garbage collection",
    )
    parser.add_argument(
        "--namespace",
        default=env.get("NAMESPACE", ""),
        help="The harvester namespace",
    )
    parser.add_argument(
        "--https-port", type=int, default=DEFAULT_HTTPS_PORT, help="HTTPS listen port"
    )
    parser.add_argument(
        "--threadiness",
        type=int,
        default=DEFAULT_WEBHOOK_THREADINESS,
        help="Specify controller threads",
    )
    ns = parser.parse_args(args)

    options = WebhookOptions(
        name=ns.name,
        service_cidr=ns.service_cidr,
        controller_username=ns.controller_user,
        garbage_collection_username=ns.gc_user,
        namespace=ns.namespace,
        https_listen_port=ns.https_port,
        threadiness=ns.threadiness,
    )
    flags = _RunFlags(name=ns.name, debug=ns.debug, trace=ns.trace)
    return options, flags