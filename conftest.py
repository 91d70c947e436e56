"""
Configuration for tests with pytest

.. codeauthor:: Markus Konrad <markus.konrad@wzb.eu>
"""

from hypothesis import settings, HealthCheck


# conversion of small matrices is fast, but the first examples may be slow due to pandas / SciPy warm-up
settings.register_profile('default', deadline=2000)

# profile for CI runs, which may be slow from time to time so we disable the "too slow" HealthCheck and the deadline
settings.register_profile('ci', suppress_health_check=(HealthCheck.too_slow, ), deadline=None)

# load default settings profile
settings.load_profile('default')
