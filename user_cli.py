#!/usr/bin/env python3
"""
Finovo CLI

Command-line tool for managing users from the server terminal and for
running the financial calculators without the web UI.

Usage:
    python user_cli.py create-user <email> <password> [--name NAME]
    python user_cli.py create-superuser <email> <password>
    python user_cli.py reset-password <email> <new_password>
    python user_cli.py list-users
    python user_cli.py activate <email>
    python user_cli.py deactivate <email>

    python user_cli.py sip <monthly_amount> <annual_return_percent> <years> [--schedule]
    python user_cli.py emi <principal> <annual_rate_percent> <tenure_years>
    python user_cli.py retirement <current_age> <retirement_age> <monthly_expenses> <inflation> <expected_return>
    python user_cli.py goal <target_amount> <years> <expected_return_percent>

Add --test before the command to work on the test database.
"""
import sys
import argparse
import asyncio
from decimal import Decimal
from pathlib import Path

# Add project root to path (file is in root)
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from finovo.app.config import get_settings, set_test_mode  # noqa: E402

if "--test" in sys.argv:
    set_test_mode(True)
    sys.argv.remove("--test")

from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from finovo.app.db.session import ensure_database_exists, get_async_engine  # noqa: E402
from finovo.app.services import user_service  # noqa: E402
from finovo.app.utils import financial_math  # noqa: E402
from finovo.app.utils.decimal_utils import format_money  # noqa: E402


# =============================================================================
# USER COMMANDS
# =============================================================================

async def cmd_create_user(email: str, password: str, name: str = "", superuser: bool = False) -> bool:
    """Create a new user (and its profile)."""
    ensure_database_exists()
    engine = get_async_engine()

    async with AsyncSession(engine, expire_on_commit=False) as session:
        user, error = await user_service.create_user(
            session, email, password, name=name, is_superuser=superuser
        )

    if user:
        kind = "Superuser" if superuser else "User"
        print(f"✅ {kind} '{user.email}' created with ID {user.id}")
        return True
    print(f"❌ {error}")
    return False


async def cmd_reset_password(email: str, new_password: str) -> bool:
    """Reset a user's password."""
    engine = get_async_engine()

    async with AsyncSession(engine) as session:
        success, error = await user_service.reset_password(session, email, new_password)

    if success:
        print(f"✅ Password reset for user '{email}'")
    else:
        print(f"❌ {error}")
    return success


async def cmd_list_users() -> bool:
    """List all users."""
    engine = get_async_engine()

    async with AsyncSession(engine) as session:
        users = await user_service.list_users(session)

    if not users:
        print("No users found")
        return True

    print(f"\n{'ID':<34} {'Email':<32} {'Active':<8} {'Super':<8}")
    print("-" * 84)

    for user in users:
        active = "✅" if user.is_active else "❌"
        superuser = "👑" if user.is_superuser else ""
        print(f"{user.id:<34} {user.email:<32} {active:<8} {superuser:<8}")

    print(f"\nTotal: {len(users)} user(s)")
    return True


async def cmd_set_user_active(email: str, active: bool) -> bool:
    """Activate or deactivate a user."""
    engine = get_async_engine()

    async with AsyncSession(engine) as session:
        success, error = await user_service.set_user_active(session, email, active)

    if success:
        status = "activated" if active else "deactivated"
        print(f"✅ User '{email}' {status}")
    else:
        print(f"❌ {error}")
    return success


# =============================================================================
# CALCULATOR COMMANDS
# =============================================================================

def _money(value: Decimal) -> str:
    return format_money(value, get_settings().CURRENCY)


def cmd_sip(monthly_amount: str, annual_return_percent: str, years: str, schedule: bool = False) -> bool:
    result = financial_math.compute_sip(monthly_amount, annual_return_percent, years)
    print(f"Total invested: {_money(result.total_invested)}")
    print(f"Future value:   {_money(result.future_value)}")
    print(f"Total returns:  {_money(result.total_returns)}")

    if schedule:
        rows = financial_math.compute_sip_schedule(monthly_amount, annual_return_percent, years)
        print(f"\n{'Year':<6} {'Invested':>20} {'Value':>20} {'Returns':>20}")
        print("-" * 69)
        for row in rows:
            print(f"{row.year:<6} {_money(row.investment):>20} {_money(row.value):>20} {_money(row.returns):>20}")
    return True


def cmd_emi(principal: str, annual_rate_percent: str, tenure_years: str) -> bool:
    result = financial_math.compute_emi(principal, annual_rate_percent, tenure_years)
    print(f"Monthly EMI:    {_money(result.monthly_emi)}")
    print(f"Total payable:  {_money(result.total_payable)}")
    print(f"Total interest: {_money(result.total_interest)}")
    return True


def cmd_retirement(current_age: str, retirement_age: str, monthly_expenses: str,
                   inflation_percent: str, expected_return_percent: str) -> bool:
    plan = financial_math.compute_retirement_plan(
        current_age, retirement_age, monthly_expenses, inflation_percent, expected_return_percent
    )
    print(f"Years to retirement:      {plan.years_to_retirement}")
    print(f"Monthly expenses then:    {_money(plan.future_monthly_expenses)}")
    print(f"Required corpus:          {_money(plan.required_corpus)}")
    print(f"Required monthly SIP:     {_money(plan.required_monthly_sip)}")
    return True


def cmd_goal(target_amount: str, years: str, expected_return_percent: str) -> bool:
    result = financial_math.compute_goal_sip(target_amount, years, expected_return_percent)
    print(f"Required monthly SIP: {_money(result.required_monthly_sip)}")
    print(f"Total invested:       {_money(result.total_invested)}")
    print(f"Wealth gained:        {_money(result.wealth_gained)}")
    return True


# =============================================================================
# ENTRY POINT
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Finovo CLI: user management and financial calculators",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python user_cli.py create-superuser admin@example.com adminpass
  python user_cli.py reset-password john@example.com newpassword123
  python user_cli.py list-users
  python user_cli.py deactivate john@example.com
  python user_cli.py sip 5000 12 20 --schedule
  python user_cli.py emi 1000000 8.5 20
  python user_cli.py retirement 30 60 50000 6 10
  python user_cli.py goal 2000000 5 12
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # create-user / create-superuser
    create_parser_ = subparsers.add_parser("create-user", help="Create user")
    create_parser_.add_argument("email", help="Email address")
    create_parser_.add_argument("password", help="Password")
    create_parser_.add_argument("--name", default="", help="Display name (default: email local part)")

    super_parser = subparsers.add_parser("create-superuser", help="Create superuser")
    super_parser.add_argument("email", help="Email address")
    super_parser.add_argument("password", help="Password")
    super_parser.add_argument("--name", default="", help="Display name (default: email local part)")

    # reset-password
    reset_parser = subparsers.add_parser("reset-password", help="Reset user password")
    reset_parser.add_argument("email", help="Email address")
    reset_parser.add_argument("new_password", help="New password")

    # list-users
    subparsers.add_parser("list-users", help="List all users")

    # activate / deactivate
    act_parser = subparsers.add_parser("activate", help="Activate user")
    act_parser.add_argument("email", help="Email address")

    deact_parser = subparsers.add_parser("deactivate", help="Deactivate user")
    deact_parser.add_argument("email", help="Email address")

    # calculators
    sip_parser = subparsers.add_parser("sip", help="SIP future value")
    sip_parser.add_argument("monthly_amount")
    sip_parser.add_argument("annual_return_percent")
    sip_parser.add_argument("years")
    sip_parser.add_argument("--schedule", action="store_true", help="Also print the year-by-year table")

    emi_parser = subparsers.add_parser("emi", help="Loan EMI")
    emi_parser.add_argument("principal")
    emi_parser.add_argument("annual_rate_percent")
    emi_parser.add_argument("tenure_years")

    ret_parser = subparsers.add_parser("retirement", help="Retirement corpus and SIP")
    ret_parser.add_argument("current_age")
    ret_parser.add_argument("retirement_age")
    ret_parser.add_argument("monthly_expenses")
    ret_parser.add_argument("inflation_percent")
    ret_parser.add_argument("expected_return_percent")

    goal_parser = subparsers.add_parser("goal", help="SIP needed for a target amount")
    goal_parser.add_argument("target_amount")
    goal_parser.add_argument("years")
    goal_parser.add_argument("expected_return_percent")

    return parser


def main(argv=None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "create-user":
            ok = asyncio.run(cmd_create_user(args.email, args.password, args.name))
        elif args.command == "create-superuser":
            ok = asyncio.run(cmd_create_user(args.email, args.password, args.name, superuser=True))
        elif args.command == "reset-password":
            ok = asyncio.run(cmd_reset_password(args.email, args.new_password))
        elif args.command == "list-users":
            ok = asyncio.run(cmd_list_users())
        elif args.command == "activate":
            ok = asyncio.run(cmd_set_user_active(args.email, True))
        elif args.command == "deactivate":
            ok = asyncio.run(cmd_set_user_active(args.email, False))
        elif args.command == "sip":
            ok = cmd_sip(args.monthly_amount, args.annual_return_percent, args.years, args.schedule)
        elif args.command == "emi":
            ok = cmd_emi(args.principal, args.annual_rate_percent, args.tenure_years)
        elif args.command == "retirement":
            ok = cmd_retirement(args.current_age, args.retirement_age, args.monthly_expenses,
                                args.inflation_percent, args.expected_return_percent)
        else:
            ok = cmd_goal(args.target_amount, args.years, args.expected_return_percent)
    except financial_math.FinancialInputError as e:
        print(f"❌ {e}")
        return 2

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
