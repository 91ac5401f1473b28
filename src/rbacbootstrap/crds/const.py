CRD_GROUP = "management.cattle.io"
CRD_VERSION = "v3"

CRD_PLURAL_GLOBALROLE = "globalroles"
CRD_PLURAL_ROLETEMPLATE = "roletemplates"
CRD_PLURAL_USER = "users"
CRD_PLURAL_GLOBALROLEBINDING = "globalrolebindings"

# Marks the objects created by the one-time admin bootstrap.
BOOTSTRAP_LABEL_KEY = f"authz.{CRD_GROUP}/bootstrapping"
BOOTSTRAP_LABEL_VALUE = "admin-user"

ADMIN_GLOBAL_ROLE = "admin"
