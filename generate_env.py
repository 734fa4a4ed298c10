#!/usr/bin/env python3
"""
Environment Configuration Generator for the Trade Supply inventory calculator

This script generates a .env file with:
- Cryptographically secure SECRET_KEY for Flask
- Inventory arithmetic defaults (quantity tolerance, default packing constants)
- Server, security, rate limit and logging settings

Usage:
    python generate_env.py              # Interactive mode
    python generate_env.py --force      # Overwrite existing .env
    python generate_env.py --dev        # Development mode (less secure, predictable)
"""

import argparse
import os
import secrets
import shutil
import sys
from datetime import datetime
from pathlib import Path


class EnvGenerator:
    """Generate environment configuration"""

    def __init__(self, dev_mode=False, env_file=None):
        self.dev_mode = dev_mode
        self.env_file = Path(env_file) if env_file else Path(__file__).parent / '.env'

    def generate_secret_key(self, length=64):
        """Generate a cryptographically secure secret key"""
        if self.dev_mode:
            return "dev-secret-key-DO-NOT-USE-IN-PRODUCTION"
        return secrets.token_hex(length)

    def create_env_content(self):
        """Create the full .env file content"""
        secret_key = self.generate_secret_key()
        secure = 'False' if self.dev_mode else 'True'

        content = f"""# Trade Supply Inventory Calculator Environment Configuration
# Generated: {self._get_timestamp()}
#
# SECURITY WARNING: Keep this file secret! Never commit to version control!

# ============================================================================
# Flask Configuration
# ============================================================================

# Secret key - the application refuses to start without one
SECRET_KEY={secret_key}

# Flask debug mode: 'True' or 'False'
# WARNING: NEVER set to True in production!
FLASK_DEBUG={'True' if self.dev_mode else 'False'}

# Enable/disable Flask reloader (useful for development)
USE_RELOADER=False

# Server host (0.0.0.0 = all interfaces, 127.0.0.1 = localhost only)
FLASK_HOST=127.0.0.1

# Server port
FLASK_PORT=5000

# ============================================================================
# Inventory Settings
# ============================================================================

# Stored quantities within this distance of pallets/layers are trusted as-is
INVENTORY_QUANTITY_TOLERANCE=0.01

# Packing constants used when a product row has none
DEFAULT_FEET_PER_LAYER=100
DEFAULT_LAYERS_PER_PALLET=10

# ============================================================================
# Security Settings
# ============================================================================

# Set to True in production when using HTTPS, False for development/HTTP only
ENABLE_HTTPS={secure}

# Automatically redirect HTTP to HTTPS (requires ENABLE_HTTPS=True)
FORCE_HTTPS_REDIRECT={secure}

# Rate limiting of the calculator endpoints
RATELIMIT_ENABLED=True
CALCULATOR_RATE_LIMIT=120 per minute

# ============================================================================
# Logging Configuration
# ============================================================================

# Console log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_LEVEL={'DEBUG' if self.dev_mode else 'INFO'}

# Write trade_supply.log and errors.log into LOG_DIR
LOG_TO_FILE=True
LOG_DIR=logs
"""
        return content, {'secret_key': secret_key}

    def _get_timestamp(self):
        """Get current timestamp for documentation"""
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def file_exists(self):
        """Check if .env file already exists"""
        return self.env_file.exists()

    def create_backup(self):
        """Create backup of existing .env file"""
        if not self.file_exists():
            return None

        backup_path = self.env_file.parent / f'.env.backup.{self._get_timestamp().replace(":", "-").replace(" ", "_")}'
        shutil.copy2(self.env_file, backup_path)
        return backup_path

    def write_env_file(self, content):
        """Write content to .env file"""
        with open(self.env_file, 'w') as f:
            f.write(content)

        # Set file permissions to 600 (owner read/write only)
        os.chmod(self.env_file, 0o600)

    def display_summary(self, credentials):
        print("\n" + "=" * 80)
        if not self.dev_mode:
            print("\n🔑 Flask Secret Key:")
            print(f"   {credentials['secret_key'][:20]}...{credentials['secret_key'][-20:]}")
            print(f"   (Length: {len(credentials['secret_key'])} characters)")
        else:
            print("\n🔑 Flask Secret Key: dev-secret-key-DO-NOT-USE-IN-PRODUCTION")
            print("\n⚠️  DEV MODE: HTTPS enforcement is disabled!")
            print("   DO NOT use this configuration in production!")

        print("\n📋 Next Steps:")
        print("   1. Review the inventory defaults in .env")
        print("   2. Run: python app.py")
        print("   3. Keep .env file secure (never commit to git)")
        print("\n" + "=" * 80 + "\n")

    def generate(self, force=False):
        """
        Generate .env file

        Args:
            force: Overwrite existing .env file without prompting
        """
        if self.file_exists() and not force:
            print(f"\n⚠️  File {self.env_file} already exists!")
            response = input("Do you want to overwrite it? (yes/no): ").lower().strip()

            if response not in ['yes', 'y']:
                print("❌ Aborted. Existing .env file was not modified.")
                return False

            backup_path = self.create_backup()
            if backup_path:
                print(f"✅ Backup created: {backup_path}")

        print("\n🔧 Generating environment configuration...")
        content, credentials = self.create_env_content()

        self.write_env_file(content)
        print(f"✅ Created: {self.env_file}")

        self.display_summary(credentials)

        return True


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Generate .env configuration for the Trade Supply inventory calculator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python generate_env.py              # Interactive mode
  python generate_env.py --force      # Overwrite without prompting
  python generate_env.py --dev        # Development mode (HTTP, debug logging)
        """
    )

    parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite existing .env file without prompting'
    )

    parser.add_argument(
        '--dev', '-d',
        action='store_true',
        help='Development mode: use simple, predictable values (NOT FOR PRODUCTION!)'
    )

    args = parser.parse_args()

    print("\n" + "=" * 80)
    print("🔐 Trade Supply Inventory Calculator - Environment Generator")
    print("=" * 80)

    if args.dev:
        print("\n⚠️  WARNING: Development mode enabled!")
        print("    DO NOT use --dev flag for production deployments!\n")

    generator = EnvGenerator(dev_mode=args.dev)

    if generator.generate(force=args.force):
        sys.exit(0)
    else:
        sys.exit(1)


if __name__ == '__main__':
    main()
