from .key_generator import generate_random_words, gen_words_with_prefix_freq, generate_urls, generate_uuids
from .ip_generator import RouteConfig, RouteGenerator, cidr_to_bits, ip_to_bits


class WorkLoad:
    """Seeded source of tree keys: words, URLs, UUIDs and bit-string routes."""

    def __init__(self, seed=None, route_config=None):
        self.seed = seed
        self.route_config = route_config or RouteConfig(seed=seed)

    def words(self, num_words, p_freq=0, unique=False):
        if p_freq > 0:
            return gen_words_with_prefix_freq(num_words, p_freq, self.seed, unique)
        return generate_random_words(num_words, self.seed, unique)

    def urls(self, num_urls):
        return generate_urls(num_urls, self.seed)

    def uuids(self, num):
        return generate_uuids(num, self.seed)

    def routes(self, num_routes):
        """Routes encoded with `cidr_to_bits`, ready to be used as tree keys."""
        gen = RouteGenerator(self.route_config)
        return [cidr_to_bits(r) for r in gen.batch(num_routes)]
