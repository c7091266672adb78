from .transport import Transport, merge_query, JSON, FORM  # NOQA
from .ssh_tunnel import SSHTunnel, SSHTunnelTransport, SSHTunnelProxyInfo, HTTPOverSSHTunnel  # NOQA
