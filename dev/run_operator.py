#!/usr/bin/env python3
"""
Development script to check the management CRDs, launch the bootstrap
operator, and stream logs.

Usage:
    python dev/run_operator.py [--skip-crd-check]
"""

import argparse
import asyncio
import sys

import kopf
from kubernetes import client, config

from rbacbootstrap.crds.const import (
    CRD_GROUP,
    CRD_PLURAL_GLOBALROLEBINDING,
    CRD_PLURAL_GLOBALROLE,
    CRD_PLURAL_ROLETEMPLATE,
    CRD_PLURAL_USER,
)


def check_crds():
    """Fail early when the management.cattle.io CRDs are not installed."""
    print("🔧 Checking management CRDs...")

    try:
        config.load_kube_config()
    except Exception as e:
        print(f"❌ Failed to load kubeconfig: {e}")
        print("ℹ️  Make sure you have kubectl configured and can access your cluster")
        sys.exit(1)

    api_extensions_v1 = client.ApiextensionsV1Api()
    missing = []
    for plural in (CRD_PLURAL_GLOBALROLE, CRD_PLURAL_ROLETEMPLATE, CRD_PLURAL_USER, CRD_PLURAL_GLOBALROLEBINDING):
        crd_name = f"{plural}.{CRD_GROUP}"
        try:
            crd = api_extensions_v1.read_custom_resource_definition(name=crd_name)
            if crd.metadata.deletion_timestamp:
                print(f"⚠️  CRD {crd_name} is currently terminating")
            else:
                print(f"✅ CRD {crd_name} exists")
        except client.ApiException as e:
            if e.status == 404:
                missing.append(crd_name)
            else:
                print(f"⚠️  Error checking CRD {crd_name}: {e}")

    if missing:
        print(f"❌ Missing CRDs: {', '.join(missing)}")
        sys.exit(1)
    print()


async def run_operator():
    """Run the operator and stream logs."""
    print("🚀 Starting RBAC bootstrap operator...")

    # Import the operator module to register handlers
    import rbacbootstrap.operator  # noqa: F401

    print("📡 Streaming logs (Ctrl+C to stop)...\n")
    print("=" * 80)

    try:
        await kopf.run(
            registry=kopf.get_default_registry(),
            priority=0,
            clusterwide=True,
        )
    except KeyboardInterrupt:
        print("\n" + "=" * 80)
        print("🛑 Operator stopped by user")
        sys.exit(0)
    except Exception as e:
        print(f"\n❌ Operator error: {e}")
        sys.exit(1)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Check the management CRDs, launch the RBAC bootstrap operator, and stream logs"
    )
    parser.add_argument(
        "--skip-crd-check",
        action="store_true",
        help="Skip the CRD check (useful if the CRDs are known to be installed)",
    )

    args = parser.parse_args()

    if not args.skip_crd_check:
        check_crds()
    else:
        print("⏭️  Skipping CRD check\n")

    try:
        asyncio.run(run_operator())
    except KeyboardInterrupt:
        print("\n🛑 Interrupted")
        sys.exit(0)


if __name__ == "__main__":
    main()
