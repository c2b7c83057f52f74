import ipaddress
import random
from typing import Optional, Tuple
from dataclasses import dataclass
from faker import Faker


## === Route encoding === ##

def ip_to_bits(address):
  """Encode an IPv4 address as its 32-character bit-string."""
  return format(int(ipaddress.IPv4Address(address)), "032b")


def cidr_to_bits(cidr):
  """Encode an IPv4 network as the first `prefixlen` bits of its address.

  "10.0.0.0/8" -> "00001010". Host bits are ignored ("10.1.2.3/8" == "10.0.0.0/8").
  """
  net = ipaddress.IPv4Network(cidr, strict=False)
  return format(int(net.network_address), "032b")[:net.prefixlen]


## === Config Class === ##

@dataclass
class RouteConfig:
    """
    Configuration for RouteGenerator
        public_share: float, proportion of routes drawn from public space
        prefix_lengths: tuple, inclusive (min, max) prefix length of routes
        seed: int, seed for random number generator
    """
    public_share: float = 0.9
    prefix_lengths: Tuple[int, int] = (8, 24)
    seed: Optional[int] = None

    def __post_init__(self):
        if not 0.0 <= self.public_share <= 1.0:
            raise ValueError("public_share must be between 0 and 1")
        lo, hi = self.prefix_lengths
        if not 0 <= lo <= hi <= 32:
            raise ValueError(f"prefix_lengths must satisfy 0 <= min <= max <= 32, got {self.prefix_lengths}")


class RouteGenerator:
    """Random IPv4 routes (CIDR strings) and host addresses for routing-table workloads."""

    def __init__(self, config: RouteConfig):
        self.config = config
        self.rng = random.Random(config.seed)
        self.fake = Faker()
        if config.seed is not None:
            self.fake.seed_instance(config.seed)

    def address(self):
        if self.rng.random() < self.config.public_share:
            return self.fake.ipv4_public()
        return self.fake.ipv4_private()

    def single(self):
        """Return one route in CIDR notation, host bits cleared."""
        plen = self.rng.randint(*self.config.prefix_lengths)
        return str(ipaddress.IPv4Network(f"{self.address()}/{plen}", strict=False))

    def batch(self, n):
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single() for _ in range(n)]

    def addresses(self, n):
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.address() for _ in range(n)]
