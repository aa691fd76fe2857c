"""Service and Ingress adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kube_sections.adapters.base import ResourceAdapter, dig
from kube_sections.clients.base import BuiltinResources
from kube_sections.models.common import StatusLevel
from kube_sections.models.sections import (
    InfoGridData,
    InfoRow,
    IngressPath,
    IngressRule,
    IngressRulesData,
    IngressTLS,
    IngressTLSData,
    LabelsData,
    MessageData,
    PortsData,
    Section,
    ServicePort,
    StatusCard,
    StatusCardsData,
    TagsData,
)
from kube_sections.utils.classification import conditions_section, service_type_status

if TYPE_CHECKING:
    from kube_sections.models.actions import Resource


class ServiceAdapter(ResourceAdapter):
    kinds = ("Service", "Services")
    resource_config = BuiltinResources.SERVICES

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        spec = resource["spec"]
        status = resource.get("status") or {}
        service_type = spec.get("type") or "ClusterIP"
        load_balancer = service_type == "LoadBalancer"

        cards = [
            StatusCard(label="Type", value=service_type, status=service_type_status(service_type))
        ]
        cluster_ip = spec.get("clusterIP")
        if cluster_ip == "None":
            cards.append(StatusCard(label="Cluster IP", value="Headless"))
        elif cluster_ip:
            cards.append(StatusCard(label="Cluster IP", value=cluster_ip))
        if spec.get("externalName"):
            cards.append(StatusCard(label="External Name", value=spec["externalName"]))

        sections = [Section(id="status", data=StatusCardsData(items=cards))]

        ports = spec.get("ports") or []
        if ports:
            sections.append(
                Section(
                    id="ports",
                    title="Ports",
                    data=PortsData(
                        items=[
                            ServicePort(
                                name=p.get("name"),
                                protocol=p.get("protocol") or "TCP",
                                port=p.get("port"),
                                target_port=p.get("targetPort"),
                                node_port=p.get("nodePort"),
                                app_protocol=p.get("appProtocol"),
                            )
                            for p in ports
                        ]
                    ),
                )
            )

        if load_balancer:
            ingress = dig(status, "loadBalancer", "ingress", default=[])
            if ingress:
                data = TagsData(values=[i.get("ip") or i.get("hostname") or "N/A" for i in ingress])
            else:
                data = MessageData(
                    text="Waiting for external IP assignment", status=StatusLevel.WARNING
                )
            sections.append(Section(id="loadbalancer", title="Load Balancer", data=data))

        external_ips = spec.get("externalIPs") or []
        if external_ips:
            sections.append(
                Section(id="external-ips", title="External IPs", data=TagsData(values=external_ips))
            )

        selector = spec.get("selector") or {}
        if selector:
            sections.append(
                Section(id="selector", data=LabelsData(labels=selector, title="Selector"))
            )

        traffic = []
        if spec.get("externalTrafficPolicy"):
            policy = spec["externalTrafficPolicy"]
            traffic.append(
                InfoRow(
                    label="External Traffic",
                    value=policy,
                    color="amber" if policy == "Local" else None,
                )
            )
        if spec.get("internalTrafficPolicy"):
            traffic.append(InfoRow(label="Internal Traffic", value=spec["internalTrafficPolicy"]))
        affinity = spec.get("sessionAffinity")
        if affinity and affinity != "None":
            traffic.append(InfoRow(label="Session Affinity", value=affinity, color="purple"))
        timeout = dig(spec, "sessionAffinityConfig", "clientIP", "timeoutSeconds")
        if timeout:
            traffic.append(InfoRow(label="Affinity Timeout", value=f"{timeout}s"))
        if spec.get("healthCheckNodePort"):
            traffic.append(InfoRow(label="Health Check Port", value=spec["healthCheckNodePort"]))
        if traffic:
            sections.append(
                Section(
                    id="traffic",
                    title="Traffic Configuration",
                    data=InfoGridData(items=traffic, columns=2),
                )
            )

        ip_rows = []
        if spec.get("ipFamilies"):
            ip_rows.append(InfoRow(label="IP Families", value=", ".join(spec["ipFamilies"])))
        if spec.get("ipFamilyPolicy"):
            ip_rows.append(InfoRow(label="IP Family Policy", value=spec["ipFamilyPolicy"]))
        cluster_ips = spec.get("clusterIPs") or []
        if len(cluster_ips) > 1:
            ip_rows.append(InfoRow(label="Cluster IPs", value=", ".join(cluster_ips)))
        if ip_rows:
            sections.append(
                Section(
                    id="ip-config",
                    title="IP Configuration",
                    data=InfoGridData(items=ip_rows, columns=2),
                )
            )

        if load_balancer:
            lb_rows = []
            if spec.get("loadBalancerIP"):
                lb_rows.append(
                    InfoRow(label="Load Balancer IP", value=spec["loadBalancerIP"], color="cyan")
                )
            if spec.get("loadBalancerClass"):
                lb_rows.append(InfoRow(label="Class", value=spec["loadBalancerClass"]))
            if spec.get("loadBalancerSourceRanges"):
                lb_rows.append(
                    InfoRow(
                        label="Source Ranges", value=", ".join(spec["loadBalancerSourceRanges"])
                    )
                )
            if lb_rows and spec.get("allocateLoadBalancerNodePorts") is False:
                lb_rows.append(
                    InfoRow(label="NodePort Allocation", value="Disabled", color="amber")
                )
            if lb_rows:
                sections.append(
                    Section(
                        id="lb-config",
                        title="Load Balancer Configuration",
                        data=InfoGridData(items=lb_rows, columns=1),
                    )
                )

        sections.extend(conditions_section(status.get("conditions")))
        return sections


def _backend_service(backend: dict[str, Any]) -> tuple[str | None, int | str | None]:
    service = backend.get("service") or {}
    port = service.get("port") or {}
    return service.get("name"), port.get("number") or port.get("name")


class IngressAdapter(ResourceAdapter):
    kinds = ("Ingress", "Ingresses")
    resource_config = BuiltinResources.INGRESSES

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        spec = resource["spec"]
        lb_ingress = dig(resource, "status", "loadBalancer", "ingress", default=[])

        cards = [StatusCard(label="Ingress Class", value=spec.get("ingressClassName") or "default")]
        if lb_ingress:
            cards.append(
                StatusCard(label="Load Balancer", value="Ready", status=StatusLevel.SUCCESS)
            )
        else:
            cards.append(
                StatusCard(label="Load Balancer", value="Pending", status=StatusLevel.WARNING)
            )
        sections = [Section(id="status", data=StatusCardsData(items=cards))]

        lb_rows = []
        for entry in lb_ingress:
            if entry.get("hostname"):
                lb_rows.append(InfoRow(label="Hostname", value=entry["hostname"], color="cyan"))
            if entry.get("ip"):
                lb_rows.append(InfoRow(label="IP Address", value=entry["ip"], color="cyan"))
        if lb_rows:
            sections.append(
                Section(
                    id="load-balancer",
                    title="Load Balancer",
                    data=InfoGridData(items=lb_rows, columns=2),
                )
            )

        tls = spec.get("tls") or []
        if tls:
            sections.append(
                Section(
                    id="tls",
                    title="TLS",
                    data=IngressTLSData(
                        items=[
                            IngressTLS(secret_name=t.get("secretName"), hosts=t.get("hosts") or [])
                            for t in tls
                        ]
                    ),
                )
            )

        rules = []
        for rule in spec.get("rules") or []:
            paths = []
            for path in dig(rule, "http", "paths", default=[]):
                service, port = _backend_service(path.get("backend") or {})
                paths.append(
                    IngressPath(
                        path=path.get("path") or "/",
                        path_type=path.get("pathType"),
                        service=service,
                        port=port,
                    )
                )
            rules.append(IngressRule(host=rule.get("host") or "*", paths=paths))
        if rules:
            sections.append(
                Section(id="rules", title="Rules", data=IngressRulesData(rules=rules))
            )

        default_backend = spec.get("defaultBackend")
        if default_backend:
            service, port = _backend_service(default_backend)
            sections.append(
                Section(
                    id="default-backend",
                    title="Default Backend",
                    data=InfoGridData(
                        items=[
                            InfoRow(label="Service", value=service or "unknown"),
                            InfoRow(label="Port", value=port or "unknown"),
                        ],
                        columns=2,
                    ),
                )
            )
        return sections
