"""Fixed catalog of realistic firewall / VPN / auth log lines."""

EVENT_CATALOG = (
    "Teardown UDP connection for faddr 80.58.4.34/37074 gaddr "
    "10.0.0.187/53 laddr 192.168.0.2/53",
    "192.168.0.2 Accessed URL 212.227.109.224:/scriptlib/"
    "ClientStdScripts.js",
    "Built outbound TCP connection 152083 for faddr "
    "212.227.109.224/80 gaddr 10.0.0.187/56684 laddr "
    "192.168.0.2/56684",
    "Teardown TCP connection 151957 faddr 212.227.109.224/80 gaddr "
    "10.0.0.187/56613 laddr 192.168.0.2/56613 duration 0:04:56 "
    "bytes 11069 (TCP Reset-I)",
    "Deny TCP (no connection) from 192.168.0.2/2799 to "
    "192.168.202.1/2244 flags SYN ACK on interface inside",
    "Built UDP connection for faddr 211.9.32.235/32770 gaddr "
    "10.0.0.187/53 laddr 192.168.0.2/53",
    "Authen Session End: user '', sid 1, elapsed 313 seconds",
    "Deny icmp src outside:Some-Cisco dst inside:10.0.0.187 "
    "(type 3, code 1) by access-group \"outside_access_in\"",
)

