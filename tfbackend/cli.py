import logging
import traceback

from tfbackend.azure.api import AzureApi
from tfbackend.config import BackendConfigs
from tfbackend.emitter import render_plan, render_report
from tfbackend.errors import PreflightError, ProvisioningError, SetupCancelled
from tfbackend.parser import confirm, parse_args
from tfbackend.provisioner import BackendProvisioner
from tfbackend.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def preflight(configs: BackendConfigs) -> dict:
    """Check the CLI and session, switch subscription if asked."""
    logger.info("Checking prerequisites...")
    AzureApi.check_dependencies()
    account = AzureApi.get_account()
    if configs.subscription:
        AzureApi.set_subscription(configs.subscription)
        account = AzureApi.get_account()
    logger.info(
        f"Using subscription: {account.get('name')} ({account['id']})"
    )
    return account


def run(configs: BackendConfigs, assume_yes: bool, show_access_key: bool):
    account = preflight(configs)

    print(render_plan(configs))
    if not assume_yes:
        confirm("create the Terraform backend with this configuration")

    provisioner = BackendProvisioner(configs)
    provisioner.provision()

    access_key = None
    if show_access_key:
        access_key = AzureApi.get_storage_account_key(configs)
        logger.warning(
            "Printing the storage account key; store ARM_ACCESS_KEY securely"
        )
    print(render_report(configs, account, access_key))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.logs)

    logger.info("Starting Azure Storage Account setup for Terraform backend")
    try:
        configs = BackendConfigs.from_args(args)
    except (ValueError, RuntimeError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    logger.debug(f"Configuration: {configs.to_dict()}")

    try:
        run(configs, assume_yes=args.yes, show_access_key=args.show_access_key)
    except SetupCancelled:
        logger.info("Setup cancelled by user")
        return 0
    except PreflightError as e:
        logger.error(str(e))
        return 1
    except ProvisioningError as e:
        logger.error(str(e))
        logger.error(
            "Resources created before the failure were left in place. "
            f"Remove them with: az group delete --name {configs.resource_group}"
        )
        return 1
    except Exception as e:
        logger.error(f"Failed: {str(e)}\n{traceback.format_exc()}")
        return 1

    logger.info("Setup completed successfully!")
    return 0


if __name__ == "__main__":
    exit(main())
