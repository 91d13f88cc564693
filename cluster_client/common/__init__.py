# cluster_client/common - configuration and logging shared by core/ and the client
#
# Only stable, import-side-effect-free modules live here.

from cluster_client.common.client_config import ClientConfig, ImportConfig, load_client_config
from cluster_client.common.logging_sink import LoggingSink, StdlibLoggingSink

__all__ = ["ClientConfig", "ImportConfig", "load_client_config", "LoggingSink", "StdlibLoggingSink"]
