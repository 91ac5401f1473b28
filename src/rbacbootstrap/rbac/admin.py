"""Ensures the default admin user and its global role binding exist."""

from __future__ import annotations

import logging
from typing import List, Optional

from ..config import Configuration
from ..crds.base import ObjectMeta
from ..crds.errors import AlreadyExistsError, BootstrapError, StorageError
from ..crds.management import GlobalRoleBinding, User
from ..storage import ManagementStore
from ..utils.passwords import hash_password

USER_GENERATE_NAME = "user-"
BINDING_GENERATE_NAME = "globalrolebinding-"


class AdminBootstrapper:
    """
    Creates the default admin at most once, found again later by its label.

    The list-then-create sequence is not atomic. Two replicas starting at the
    same time can both see no admin and both create one; with generated names
    nothing stops the second create, so two admins can exist. A conflict on
    create is treated as "another replica won" and the admin is looked up
    again. Setting ``admin.name`` in the configuration gives the user a fixed
    name, which turns the race into a conflict the API server enforces.
    """

    def __init__(
        self,
        store: ManagementStore,
        settings: Configuration,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.store = store
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.labels = settings.bootstrap_labels

    def ensure_default_admin(self) -> str:
        admin = self._ensure_admin_user()
        self._ensure_admin_binding(admin)
        return admin.metadata.name

    def _list_admins(self) -> List[User]:
        try:
            return self.store.list_users(self.labels)
        except StorageError as exc:
            raise BootstrapError("can not list admin users") from exc

    def _ensure_admin_user(self) -> User:
        admins = self._list_admins()
        if admins:
            if len(admins) > 1:
                self.logger.warning(
                    "Found %d bootstrap admin users (%s); using '%s'",
                    len(admins),
                    ", ".join(a.metadata.name or "?" for a in admins),
                    admins[0].metadata.name,
                )
            self.logger.info("Default admin user '%s' already exists", admins[0].metadata.name)
            return admins[0]

        try:
            admin = self.store.create_user(self._build_admin_user())
        except AlreadyExistsError:
            self.logger.info("Default admin user was created concurrently, looking it up")
            admins = self._list_admins()
            if not admins:
                raise BootstrapError(
                    "can not ensure admin user exists: create reported a conflict "
                    "but no labeled admin user was found"
                )
            return admins[0]
        except StorageError as exc:
            raise BootstrapError("can not ensure admin user exists") from exc

        self.logger.info("Created default admin user '%s'", admin.metadata.name)
        return admin

    def _build_admin_user(self) -> User:
        name = self.settings.admin_name
        return User(
            metadata=ObjectMeta(
                name=name,
                generate_name=None if name else USER_GENERATE_NAME,
                labels=dict(self.labels),
            ),
            display_name=self.settings.admin_display_name,
            username=self.settings.admin_username,
            password=hash_password(self.settings.admin_password, self.settings.bcrypt_rounds),
            must_change_password=self.settings.admin_must_change_password,
        )

    def _ensure_admin_binding(self, admin: User) -> None:
        try:
            bindings = self.store.list_global_role_bindings(self.labels)
        except StorageError as exc:
            raise BootstrapError("can not list admin role bindings") from exc
        if bindings:
            self.logger.info("Admin global role binding '%s' already exists", bindings[0].metadata.name)
            return

        binding = GlobalRoleBinding(
            metadata=ObjectMeta(generate_name=BINDING_GENERATE_NAME, labels=dict(self.labels)),
            user_name=admin.metadata.name,
            global_role_name=self.settings.admin_global_role,
        )
        try:
            created = self.store.create_global_role_binding(binding)
        except AlreadyExistsError:
            self.logger.info("Admin global role binding was created concurrently")
            return
        except StorageError as exc:
            raise BootstrapError("can not ensure admin role binding exists") from exc
        self.logger.info(
            "Bound user '%s' to global role '%s' via '%s'",
            admin.metadata.name,
            self.settings.admin_global_role,
            created.metadata.name,
        )
