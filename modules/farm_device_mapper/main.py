"""Farm Device Mapper Module Entry Point

This module serves as the command-line interface and main entry point for the
farm device mapper module.
"""

import argparse
import sys
from typing import Optional

from mapper_core.config import ConfigLoader
from mapper_core.exceptions import MapperBaseException
from mapper_core.utils import configure_logging
from .processor import FarmDeviceMapper


def main(args: Optional[list] = None) -> int:
    """Main entry point for the farm device mapper module.
    
    Args:
        args: Command line arguments (defaults to sys.argv)
        
    Returns:
        Exit code (0 for success, 1 for processing failure, 2 when no user is given)
    """
    parser = argparse.ArgumentParser(
        description="Farm Device Mapper - Match soil sensors to the farms containing them"
    )
    parser.add_argument(
        "--user-id",
        help="User whose farms and devices are mapped"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Compute farm device lists without storing them (default: processing.dry_run)"
    )
    parser.add_argument(
        "--environment",
        choices=["development", "production"],
        default="development",
        help="Environment to run against (default: development)"
    )
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory containing environment_config.json (default: config/)"
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Directory for rotating log files"
    )
    
    parsed_args = parser.parse_args(args)
    
    if not parsed_args.user_id:
        print("There is no user id specified, please specify one with --user-id")
        return 2
    
    config_loader = ConfigLoader(parsed_args.config_dir)
    try:
        configure_logging(config_loader, parsed_args.environment, log_dir=parsed_args.log_dir)
    except MapperBaseException as e:
        print(f"Configuration error: {e}")
        return 1
    
    mapper = FarmDeviceMapper(config_loader, parsed_args.environment)
    result = mapper.process(parsed_args.user_id, dry_run=parsed_args.dry_run)
    
    print(f"Farm Device Mapper - user {parsed_args.user_id}")
    print(f"Environment: {parsed_args.environment}")
    print(f"Dry-run mode: {result.metadata.get('dry_run')}")
    print(f"Farms mapped: {result.records_processed}")
    for error in result.errors:
        print(f"Error: {error}")
    
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
