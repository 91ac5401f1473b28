# NOTE: Importing the handlers registers them with kopf so that
#       `kopf.run -m rbacbootstrap.operator` can work. If you add more
#       handlers, import them here.
# flake8: noqa: F401
from .operator import bootstrap_on_startup
