"""Shared fixtures: sample resources as returned by the API server."""

import base64
from typing import Any

import pytest

from kube_sections.clients.static import StaticResourceAccessor
from kube_sections.registry import AdapterRegistry


def b64(value: str | bytes) -> str:
    """Base64-encode a value the way Secret data is stored."""
    raw = value.encode("utf-8") if isinstance(value, str) else value
    return base64.b64encode(raw).decode("ascii")


@pytest.fixture
def deployment() -> dict[str, Any]:
    """Sample Deployment mid-rollout."""
    return {
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {
            "name": "web",
            "namespace": "shop",
            "uid": "dep-uid-1",
            "labels": {"app": "web", "pod-template-hash": "abc1234"},
            "annotations": {
                "deployment.kubernetes.io/revision": "3",
                "kubectl.kubernetes.io/last-applied-configuration": "{}",
                "team": "storefront",
            },
        },
        "spec": {
            "replicas": 3,
            "selector": {"matchLabels": {"app": "web"}},
            "strategy": {
                "type": "RollingUpdate",
                "rollingUpdate": {"maxSurge": 1, "maxUnavailable": 0},
            },
            "template": {
                "metadata": {"labels": {"app": "web"}},
                "spec": {
                    "containers": [
                        {"name": "web", "image": "nginx:1.25"},
                        {"name": "sidecar", "image": "envoy:1.29"},
                    ]
                },
            },
        },
        "status": {
            "replicas": 4,
            "readyReplicas": 2,
            "updatedReplicas": 4,
            "availableReplicas": 2,
            "conditions": [
                {"type": "Available", "status": "True", "reason": "MinimumReplicasAvailable"},
                {
                    "type": "Progressing",
                    "status": "False",
                    "reason": "ProgressDeadlineExceeded",
                    "message": "ReplicaSet web-abc1234 has timed out progressing.",
                },
            ],
        },
    }


def make_replicaset(
    name: str,
    revision: str | None = None,
    owner: dict[str, Any] | None = None,
    replicas: int = 0,
    namespace: str = "shop",
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name, "namespace": namespace, "annotations": {}}
    if revision is not None:
        metadata["annotations"]["deployment.kubernetes.io/revision"] = revision
    if owner is not None:
        metadata["ownerReferences"] = [owner]
    return {
        "apiVersion": "apps/v1",
        "kind": "ReplicaSet",
        "metadata": metadata,
        "spec": {
            "replicas": replicas,
            "template": {"spec": {"containers": [{"name": "web", "image": f"nginx:{name}"}]}},
        },
        "status": {"replicas": replicas, "readyReplicas": replicas},
    }


@pytest.fixture
def replicasets() -> list[dict[str, Any]]:
    """ReplicaSets around the ``web`` Deployment, related and not."""
    owner = {"apiVersion": "apps/v1", "kind": "Deployment", "name": "web", "uid": "dep-uid-1"}
    return [
        make_replicaset("web-5d8f9c7b6", revision="2", owner=owner),
        make_replicaset("web-7c9d8e6f5", revision="3", owner=owner, replicas=3),
        make_replicaset("web-abc1234", revision="1"),
        make_replicaset("web-extra"),
        make_replicaset(
            "web-other-1234567",
            revision="9",
            owner={**owner, "name": "web-other", "uid": "dep-uid-2"},
        ),
    ]


@pytest.fixture
def statefulset() -> dict[str, Any]:
    return {
        "apiVersion": "apps/v1",
        "kind": "StatefulSet",
        "metadata": {"name": "db", "namespace": "shop"},
        "spec": {
            "replicas": 3,
            "serviceName": "db-headless",
            "updateStrategy": {"type": "RollingUpdate", "rollingUpdate": {"partition": 1}},
            "template": {"spec": {"containers": [{"name": "postgres", "image": "postgres:16"}]}},
            "volumeClaimTemplates": [
                {
                    "metadata": {"name": "data"},
                    "spec": {
                        "accessModes": ["ReadWriteOnce"],
                        "storageClassName": "fast",
                        "resources": {"requests": {"storage": "10Gi"}},
                    },
                }
            ],
        },
        "status": {
            "readyReplicas": 2,
            "currentReplicas": 3,
            "updatedReplicas": 1,
            "currentRevision": "db-6f7d",
            "updateRevision": "db-8a9b",
        },
    }


@pytest.fixture
def pvcs() -> list[dict[str, Any]]:
    def pvc(name: str) -> dict[str, Any]:
        return {
            "apiVersion": "v1",
            "kind": "PersistentVolumeClaim",
            "metadata": {"name": name, "namespace": "shop"},
            "spec": {"storageClassName": "fast", "accessModes": ["ReadWriteOnce"]},
            "status": {"phase": "Bound", "capacity": {"storage": "10Gi"}},
        }

    return [pvc("data-db-0"), pvc("data-db-1"), pvc("data-dbx-0"), pvc("logs-db-0")]


@pytest.fixture
def daemonset() -> dict[str, Any]:
    return {
        "apiVersion": "apps/v1",
        "kind": "DaemonSet",
        "metadata": {"name": "node-exporter", "namespace": "monitoring"},
        "spec": {
            "updateStrategy": {"type": "RollingUpdate", "rollingUpdate": {"maxUnavailable": 2}},
            "template": {
                "spec": {
                    "nodeSelector": {"kubernetes.io/os": "linux"},
                    "containers": [{"name": "exporter", "image": "prom/node-exporter:v1.8"}],
                }
            },
        },
        "status": {
            "desiredNumberScheduled": 5,
            "currentNumberScheduled": 5,
            "numberReady": 4,
            "numberAvailable": 4,
            "updatedNumberScheduled": 3,
            "numberMisscheduled": 1,
        },
    }


@pytest.fixture
def pod() -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": "web-7c9d8e6f5-x2x7z",
            "namespace": "shop",
            "labels": {"app": "web", "pod-template-hash": "7c9d8e6f5"},
            "annotations": {"kubectl.kubernetes.io/last-applied-configuration": "{}"},
        },
        "spec": {
            "nodeName": "worker-1",
            "initContainers": [
                {
                    "name": "migrate",
                    "image": "web-migrate:1",
                    "volumeMounts": [{"name": "config", "mountPath": "/etc/web"}],
                }
            ],
            "containers": [
                {
                    "name": "web",
                    "image": "nginx:1.25",
                    "ports": [{"name": "http", "containerPort": 8080, "protocol": "TCP"}],
                    "resources": {"requests": {"cpu": "100m"}, "limits": {"memory": "256Mi"}},
                    "volumeMounts": [
                        {"name": "config", "mountPath": "/etc/nginx", "readOnly": True},
                        {"name": "cache", "mountPath": "/var/cache"},
                    ],
                }
            ],
            "volumes": [
                {"name": "config", "configMap": {"name": "web-config", "defaultMode": 420}},
                {"name": "cache", "emptyDir": {}},
            ],
        },
        "status": {
            "phase": "Running",
            "podIP": "10.0.0.12",
            "containerStatuses": [
                {
                    "name": "web",
                    "ready": False,
                    "restartCount": 2,
                    "state": {"waiting": {"reason": "CrashLoopBackOff"}},
                }
            ],
            "initContainerStatuses": [
                {
                    "name": "migrate",
                    "ready": True,
                    "restartCount": 0,
                    "state": {"terminated": {"reason": "Completed"}},
                }
            ],
            "conditions": [
                {"type": "PodScheduled", "status": "True"},
                {"type": "Ready", "status": "False", "reason": "ContainersNotReady"},
            ],
        },
    }


@pytest.fixture
def job() -> dict[str, Any]:
    return {
        "apiVersion": "batch/v1",
        "kind": "Job",
        "metadata": {"name": "report-28912345", "namespace": "batch"},
        "spec": {
            "completions": 3,
            "parallelism": 2,
            "backoffLimit": 4,
            "ttlSecondsAfterFinished": 600,
            "template": {"spec": {"containers": [{"name": "report", "image": "report:2"}]}},
        },
        "status": {
            "active": 1,
            "succeeded": 1,
            "failed": 1,
            "startTime": "2024-05-01T10:00:00Z",
            "conditions": [{"type": "Suspended", "status": "False"}],
        },
    }


@pytest.fixture
def cronjob() -> dict[str, Any]:
    return {
        "apiVersion": "batch/v1",
        "kind": "CronJob",
        "metadata": {"name": "report", "namespace": "batch", "uid": "cron-uid-1"},
        "spec": {
            "schedule": "0 0 * * *",
            "concurrencyPolicy": "Forbid",
            "jobTemplate": {
                "spec": {
                    "backoffLimit": 2,
                    "template": {
                        "spec": {"containers": [{"name": "report", "image": "report:2"}]}
                    },
                }
            },
        },
        "status": {
            "active": [{"name": "report-28912345"}],
            "lastScheduleTime": "2024-05-01T00:00:00Z",
        },
    }


@pytest.fixture
def node() -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "Node",
        "metadata": {
            "name": "worker-1",
            "labels": {"node-role.kubernetes.io/worker": "", "kubernetes.io/os": "linux"},
        },
        "spec": {"taints": [{"key": "dedicated", "value": "gpu", "effect": "NoSchedule"}]},
        "status": {
            "addresses": [
                {"type": "InternalIP", "address": "192.168.1.10"},
                {"type": "Hostname", "address": "worker-1"},
            ],
            "capacity": {"cpu": "8", "memory": "32Gi", "pods": "110"},
            "allocatable": {"cpu": "7500m", "memory": "31Gi", "pods": "110"},
            "nodeInfo": {
                "operatingSystem": "linux",
                "architecture": "amd64",
                "kernelVersion": "6.1.0",
                "osImage": "Ubuntu 22.04",
                "containerRuntimeVersion": "containerd://1.7.0",
                "kubeletVersion": "v1.29.0",
                "kubeProxyVersion": "v1.29.0",
            },
            "conditions": [
                {"type": "Ready", "status": "True"},
                {"type": "MemoryPressure", "status": "False"},
                {"type": "DiskPressure", "status": "True", "reason": "KubeletHasDiskPressure"},
            ],
        },
    }


@pytest.fixture
def service() -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "Service",
        "metadata": {"name": "web", "namespace": "shop"},
        "spec": {
            "type": "LoadBalancer",
            "clusterIP": "10.96.0.15",
            "clusterIPs": ["10.96.0.15"],
            "ports": [{"name": "http", "port": 80, "targetPort": "http", "nodePort": 31080}],
            "selector": {"app": "web"},
            "externalTrafficPolicy": "Local",
            "sessionAffinity": "None",
            "ipFamilies": ["IPv4"],
            "ipFamilyPolicy": "SingleStack",
            "loadBalancerSourceRanges": ["10.0.0.0/8"],
        },
        "status": {"loadBalancer": {"ingress": [{"ip": "203.0.113.7"}]}},
    }


@pytest.fixture
def ingress() -> dict[str, Any]:
    return {
        "apiVersion": "networking.k8s.io/v1",
        "kind": "Ingress",
        "metadata": {"name": "web", "namespace": "shop"},
        "spec": {
            "ingressClassName": "nginx",
            "tls": [{"hosts": ["shop.example.com"], "secretName": "web-tls"}],
            "rules": [
                {
                    "host": "shop.example.com",
                    "http": {
                        "paths": [
                            {
                                "path": "/api",
                                "pathType": "Prefix",
                                "backend": {"service": {"name": "api", "port": {"number": 8080}}},
                            },
                            {
                                "pathType": "ImplementationSpecific",
                                "backend": {"service": {"name": "web", "port": {"name": "http"}}},
                            },
                        ]
                    },
                },
                {"http": {"paths": []}},
            ],
            "defaultBackend": {"service": {"name": "fallback", "port": {"number": 80}}},
        },
        "status": {"loadBalancer": {"ingress": [{"hostname": "lb.example.com"}]}},
    }


@pytest.fixture
def configmap() -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "ConfigMap",
        "metadata": {"name": "web-config", "namespace": "shop"},
        "data": {
            "LOG_LEVEL": "debug",
            "WORKERS": 4,
            "nginx.conf": "server {\n  listen 80;\n}\n",
        },
        "binaryData": {"favicon.ico": b64(b"\x00\x00\x01\x00")},
    }


@pytest.fixture
def secret() -> dict[str, Any]:
    pem = "-----BEGIN CERTIFICATE-----\nMIIB\n-----END CERTIFICATE-----\n"
    return {
        "apiVersion": "v1",
        "kind": "Secret",
        "metadata": {
            "name": "web-tls",
            "namespace": "shop",
            "annotations": {"kubernetes.io/description": "internal", "owner": "team-web"},
        },
        "type": "kubernetes.io/tls",
        "data": {
            "ca.crt": b64(pem),
            "password": b64("s3cr3t"),
            "keystore": b64(b"\x00\x01\x02binary"),
        },
    }


@pytest.fixture
def pv() -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "PersistentVolume",
        "metadata": {"name": "pv-nfs-1"},
        "spec": {
            "capacity": {"storage": "100Gi"},
            "accessModes": ["ReadWriteMany"],
            "persistentVolumeReclaimPolicy": "Retain",
            "storageClassName": "nfs",
            "claimRef": {"namespace": "shop", "name": "shared"},
            "nfs": {"server": "nfs.local", "path": "/exports/shared"},
            "mountOptions": ["nfsvers=4.1"],
            "nodeAffinity": {
                "required": {
                    "nodeSelectorTerms": [
                        {
                            "matchExpressions": [
                                {
                                    "key": "topology.kubernetes.io/zone",
                                    "operator": "In",
                                    "values": ["zone-a", "zone-b"],
                                }
                            ]
                        }
                    ]
                }
            },
        },
        "status": {"phase": "Bound"},
    }


@pytest.fixture
def pvc() -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "PersistentVolumeClaim",
        "metadata": {"name": "shared", "namespace": "shop"},
        "spec": {
            "accessModes": ["ReadWriteMany"],
            "storageClassName": "nfs",
            "resources": {"requests": {"storage": "50Gi"}},
            "volumeName": "pv-nfs-1",
        },
        "status": {"phase": "Bound", "capacity": {"storage": "100Gi"}},
    }


@pytest.fixture
def event() -> dict[str, Any]:
    return {
        "apiVersion": "v1",
        "kind": "Event",
        "metadata": {"name": "web.17a", "namespace": "shop"},
        "type": "Warning",
        "reason": "BackOff",
        "message": "Back-off restarting failed container",
        "count": 5,
        "involvedObject": {"kind": "Pod", "name": "web-7c9d8e6f5-x2x7z", "namespace": "shop"},
        "source": {"component": "kubelet", "host": "worker-1"},
        "firstTimestamp": "2024-05-01T10:00:00Z",
        "lastTimestamp": "2024-05-01T10:05:00Z",
        "reportingComponent": "kubelet",
    }


@pytest.fixture
def accessor() -> StaticResourceAccessor:
    """Empty in-memory accessor."""
    return StaticResourceAccessor()


@pytest.fixture
def registry(accessor: StaticResourceAccessor) -> AdapterRegistry:
    """Registry with the core adapters only."""
    return AdapterRegistry.from_plugins(accessor, load_entrypoints=False)
