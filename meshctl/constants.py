# Environment variables that override the defaults of `meshctl system config`
TOKEN_ENV_VAR = "MESHCTL_TOKEN"
SERVER_URL_ENV_VAR = "MESHCTL_SERVER_URL"
KUBECONFIG_DIR_ENV_VAR = "MESHCTL_KUBECONFIG_DIR"

# The control plane API listens on localhost without TLS
DEFAULT_SERVER_URL = "http://localhost:9081"

# Lists the contexts found in an uploaded kubeconfig
CONTEXTS_ENDPOINT = "/api/k8sconfig/contexts"

# Activates one context of an uploaded kubeconfig
SET_CONTEXT_ENDPOINT = "/api/k8sconfig"

# Multipart field names understood by the control plane
KUBECONFIG_FIELD = "k8sfile"
CONTEXT_NAME_FIELD = "contextName"

# Cookies carrying the credentials from the auth config file
TOKEN_COOKIE = "token"
PROVIDER_COOKIE = "meshery-provider"

# The auth config file written when logging in to the control plane
DEFAULT_TOKEN_PATH = "~/.meshery/auth.json"

# The provisioning scripts write the kubeconfig into this directory
DEFAULT_KUBECONFIG_DIR = "/tmp/meshery"
KUBECONFIG_FILE_NAME = "kubeconfig.yaml"

# The namespace of the service account created on GKE
GKE_SA_NAMESPACE = "default"
GKE_SA_PREFIX = "sa-meshctl-"

# How many seconds the GKE script waits for the service account token
GKE_TOKEN_WAIT_SECONDS = 60
