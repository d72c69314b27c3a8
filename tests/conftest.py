import os

from hypothesis import settings

# Parse times vary a lot with generated program size; no per-example deadline.
# Example counts come from the profile only; tests do not override them.
settings.register_profile("dev", deadline=None, max_examples=50)
settings.register_profile("ci", deadline=None, max_examples=300)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
