import pytest

# One CRD, one RoleBinding, one Namespace, one Deployment - the layout every
# assembler run in the release pipeline has to get right.
SCENARIO_STREAM = """\
apiVersion: apiextensions.k8s.io/v1
kind: CustomResourceDefinition
metadata:
  name: foos.example.com
  namespace: awx
spec:
  group: example.com
  names:
    kind: Foo
    plural: foos
---
apiVersion: rbac.authorization.k8s.io/v1
kind: RoleBinding
metadata:
  name: manager-rolebinding
  namespace: awx
roleRef:
  apiGroup: rbac.authorization.k8s.io
  kind: Role
  name: manager-role
subjects:
- kind: ServiceAccount
  name: sa
  namespace: awx
---
apiVersion: v1
kind: Namespace
metadata:
  name: awx
---
apiVersion: apps/v1
kind: Deployment
metadata:
  name: bar
  namespace: awx
spec:
  replicas: 1
  template:
    spec:
      containers:
      - name: manager
        image: quay.io/ansible/awx-operator:1.2.3
"""


@pytest.fixture
def scenario_stream() -> str:
    return SCENARIO_STREAM
