"""Command-line interface for a single credit card account."""

from decimal import Decimal, ROUND_HALF_UP

from account import CreditCardAccount
from settings import CONFIG_FILE, CardConfig, load_config, setup_logging
from transaction import CHARGE, PAYMENT, to_money

CENT = Decimal("0.01")

COMMANDS = [
    ("p", "Add a payment"),
    ("c", "Add a charge"),
    ("b", "Get the balance on a day"),
    ("s", "Show the balance after the latest transaction"),
    ("i", "Show interest projected for the open cycle"),
    ("h", "Display this help message"),
    ("q", "Quit"),
]


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def print_help() -> None:
    for key, text in COMMANDS:
        print(f"{key}\t{text}")


# ---------------------------------------------------------------------------
# Prompts


def _prompt_decimal(prompt: str, default: Decimal) -> Decimal:
    raw = input(f"{prompt} [{default}]: ").strip()
    if not raw:
        return default
    return to_money(raw, prompt)


def _prompt_amount(prompt: str) -> Decimal:
    return to_money(input(prompt).strip())


def _prompt_day(prompt: str) -> int:
    raw = input(prompt).strip()
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Not a day: {raw!r}") from None


# ---------------------------------------------------------------------------
# Commands


def _add(account: CreditCardAccount, kind: str) -> None:
    label = "Payment" if kind == PAYMENT else "Charge"
    amount = _prompt_amount(f"How much was the {label.lower()}? ")
    day = _prompt_day("How many days after the account opening did it happen? ")
    if account.add_transaction(amount, day, kind):
        print(f"{label} was successful!")
    else:
        print(f"{label} was too much!")


def _balance_on_day(account: CreditCardAccount) -> None:
    day = _prompt_day("On what day did you want the balance? ")
    balance = account.balance_on_day(day)
    print(f"Balance on day {day} after opening: ${_money(balance)}")


def _current_balance(account: CreditCardAccount) -> None:
    balance, as_of = account.current_balance()
    if as_of is None:
        print("No transactions yet.")
        return
    print(f"Balance: ${_money(balance)} as of {as_of.date().isoformat()}")


def _projected_interest(account: CreditCardAccount) -> None:
    interest = account.projected_cycle_interest()
    print(f"Interest at the close of the open cycle: ${_money(interest)}")


def run_command(account: CreditCardAccount, command: str) -> bool:
    """Run one menu command. Returns False when the user asked to quit."""
    if command == "q":
        return False
    try:
        if command == "p":
            _add(account, PAYMENT)
        elif command == "c":
            _add(account, CHARGE)
        elif command == "b":
            _balance_on_day(account)
        elif command == "s":
            _current_balance(account)
        elif command == "i":
            _projected_interest(account)
        elif command == "h":
            print_help()
        elif command:
            print("Invalid option. Type h for help.")
    except ValueError as exc:
        print(f"Error: {exc}")
    return True


# ---------------------------------------------------------------------------
# Menu


def open_account(config: CardConfig) -> CreditCardAccount:
    """Ask for the APR and credit limit, offering the configured defaults."""
    while True:
        try:
            apr = _prompt_decimal("APR (as decimal)", config.apr)
            limit = _prompt_decimal("Credit limit", config.credit_limit)
            return CreditCardAccount(
                apr,
                limit,
                config.start_date,
                enforce_limits_on_corrections=config.enforce_limits_on_corrections,
            )
        except ValueError as exc:
            print(f"Error: {exc}")


def main() -> None:
    """Set up the account and run the command loop."""
    try:
        config = load_config()
    except ValueError as exc:
        print(f"Error in {CONFIG_FILE.name}: {exc}")
        config = CardConfig()
    setup_logging(config.log_level)
    try:
        account = open_account(config)
        print("--- Credit Card Account ---")
        print_help()
        while run_command(account, input("> ").strip().lower()):
            pass
    except EOFError:
        print()


if __name__ == "__main__":
    main()
