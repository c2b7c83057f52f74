import logging
import math
import random
from collections import defaultdict

from faker import Faker
from faker.providers.lorem.en_US import Provider as LoremProvider

logger = logging.getLogger(__name__)

# Word list shipped with Faker's English lorem provider
WORDS_BROAD = sorted({w for w in LoremProvider.word_list if w})
WORDS_COMMON = [w for w in WORDS_BROAD if len(w) >= 3]


## Created dictionary for words with identical first two letters
## This is to generate words with common prefixes
prefix_bucket = defaultdict(list)
for word in WORDS_BROAD:
  prefix_bucket[word[:2]].append(word)
prefixes = list(prefix_bucket.keys())
prefix_weights = [len(prefix_bucket[p]) for p in prefixes]


def _faker(seed):
  fake = Faker()
  if seed is not None:
    fake.seed_instance(seed)
  return fake


def generate_random_words(num_words, seed=None, unique=False):
  """
  Return n random words from WORDS_COMMON.
  - unique=False: sample with replacement (fast, allows duplicates)
  - unique=True: sample without replacement (requires n <= len(WORDS_COMMON))
  """
  word_list = WORDS_COMMON
  if num_words < 1 or (unique is True and num_words > len(word_list)):
    raise ValueError(f"num_words must be between 1 and {len(word_list)}")
  rng = random.Random(seed)
  if unique:
    return rng.sample(word_list, num_words)
  return rng.choices(word_list, k=num_words)


def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False):
  """Generates a list of words with a given prefix frequency.
  A higher prefix_freq means more consecutive words share their first two
  letters. Prefix frequency is applied logarithmically
  prefix_freq: 0 -> 0.999...
  """
  def _p_eff_log(x, max_mean=100) -> float:
    # Logarithmic mapping of prefix frequency to effective prefix frequency
    if x < 0 or x > 1:
      raise ValueError("Prefix frequency must be between 0 and 1")
    x = max(0.0, min(0.999999, x))
    k = math.log(max_mean)
    p = 1.0 - math.exp(-k * x)
    return min(p, 0.999999)
  prefix_freq = _p_eff_log(prefix_freq)

  word_list = WORDS_BROAD
  max_unique = len(word_list)
  if num_words < 1 or (unique is True and num_words > max_unique):
    raise ValueError(f"num_words must be between 1 and {max_unique}")
  rng = random.Random(seed)

  rand_words_list = []
  seen = set()
  exhausted = set()

  while len(rand_words_list) < num_words:
    prefix = rng.choices(prefixes, weights=prefix_weights)[0]
    options = prefix_bucket[prefix]
    if unique:
      if prefix in exhausted:
        continue
      remaining = [w for w in options if w not in seen]
      if not remaining:
        exhausted.add(prefix)
        continue
      sample_word = rng.choice(remaining)
    else:
      sample_word = rng.choice(options)
    rand_words_list.append(sample_word)
    seen.add(sample_word)

    trigger = rng.random()
    while trigger < prefix_freq and len(rand_words_list) < num_words:
      if unique:
        remaining = [w for w in options if w not in seen]
        if not remaining:
          exhausted.add(prefix)
          break
        new_word = rng.choice(remaining)
      else:
        new_word = rng.choice(options)
      rand_words_list.append(new_word)
      seen.add(new_word)
      trigger = rng.random()

  logger.debug("generated %d words (prefix_freq=%.3f, unique=%s)",
               len(rand_words_list), prefix_freq, unique)
  return rand_words_list


def generate_urls(num_urls, seed=None):
  """Return `num_urls` URLs; many share scheme + host, giving long common prefixes."""
  if num_urls < 1:
    raise ValueError("num_urls must be positive")
  fake = _faker(seed)
  return [fake.uri() for _ in range(num_urls)]


def generate_uuids(num, seed=None):
  """Return `num` upper-case UUID strings (uniformly spread first characters)."""
  if num < 1:
    raise ValueError("num must be positive")
  fake = _faker(seed)
  return [fake.uuid4().upper() for _ in range(num)]
