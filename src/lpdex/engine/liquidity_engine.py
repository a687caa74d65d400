"""LiquidityEngine — операции пула ликвидности одной пары.

Операции:
- init: однократная инициализация пула (фиксирует начальное соотношение)
- add_liquidity: пропорциональный депозит с потолком token_amount_max
- remove_liquidity: пропорциональный вывод по количеству claim
- transfer / approve / transfer_from: claim-токен как fungible-актив
- read-only accessors и preview_* котировки

Модель исполнения:
- Каждая изменяющая операция транзакционна для внутреннего состояния:
  снапшот PoolState на входе, восстановление при любом исключении
- Checks-effects-interactions: все изменения PoolState выполняются до
  первого обращения к TokenLedger
- Reentrancy guard: вложенный вход в любую изменяющую операцию во время
  исполнения другой отвергается с ReentrantCall
- События отправляются в EventSink после успешного завершения операции
"""

import logging
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional

from lpdex.core.domain.errors import (
    AlreadyInitialized,
    ClaimAmountZero,
    DepositAmountZero,
    InsufficientClaim,
    LiquidityError,
    PoolNotInitialized,
    ReentrantCall,
    SlippageExceeded,
    TransferFailed,
    WithdrawAmountZero,
)
from lpdex.core.domain.events import (
    ClaimTransferred,
    LiquidityAdded,
    LiquidityInitialized,
    LiquidityRemoved,
    PoolEvent,
)
from lpdex.core.domain.pool_state import PoolPhase, PoolSnapshot, PoolState
from lpdex.core.domain.units import Amount, validate_amount
from lpdex.core.math.proportional import (
    DepositQuote,
    WithdrawalQuote,
    quote_deposit,
    quote_withdrawal,
)
from lpdex.engine.config import CallContext, PoolConfig
from lpdex.engine.events import EventSink, LoggingEventSink
from lpdex.ledger.token_ledger import TokenLedger

logger = logging.getLogger(__name__)


class LiquidityEngine:
    """Движок учёта ликвидности пула base asset / token.

    Владеет единственным PoolState. Внешние коллабораторы:
    - token_ledger: внешний токен (pull по allowance, выплаты через transfer)
    - base_ledger: ledger base asset; приложенное к вызову value списывается
      с caller на адрес пула, выплаты идут с адреса пула
    - event_sink: получатель событий (по умолчанию LoggingEventSink)

    Порядок interactions при депозите: сначала pull token по allowance,
    затем списание приложенного value (покрытие value проверяется на этапе checks);
    если списание value всё же не удалось, token возвращается caller.
    Перед выплатами проверяется, что балансы пула в ledger-ах их покрывают;
    если выплата token не удалась, уже выплаченный base возвращается в пул.
    Неудавшаяся компенсация поднимает TransferFailed с застрявшим количеством
    в details. Атомарность между разными ledger-ами в общем случае обеспечивает
    хост-среда.
    """

    def __init__(
        self,
        token_ledger: TokenLedger,
        base_ledger: TokenLedger,
        config: Optional[PoolConfig] = None,
        event_sink: Optional[EventSink] = None,
    ):
        self.config = config or PoolConfig()
        self._token = token_ledger
        self._base = base_ledger
        self._sink: EventSink = event_sink or LoggingEventSink()
        self._state = PoolState(
            pool_address=self.config.pool_address,
            token_ledger_address=token_ledger.address,
        )

        # Reentrancy guard
        self._active_operation: Optional[str] = None

    # =========================================================================
    # IDENTITY / CLAIM TOKEN METADATA
    # =========================================================================

    @property
    def address(self) -> str:
        return self.config.pool_address

    @property
    def name(self) -> str:
        return self.config.claim_name

    @property
    def symbol(self) -> str:
        return self.config.claim_symbol

    @property
    def decimals(self) -> int:
        return self.config.claim_decimals

    # =========================================================================
    # LIQUIDITY OPERATIONS
    # =========================================================================

    def init(self, ctx: CallContext, token_amount: Amount) -> None:
        """Однократная инициализация пула.

        base_amount = ctx.value. Начальное соотношение цен фиксируется как
        token_amount : base_amount, claim_supply = base_amount.

        Args:
            ctx: контекст вызова (caller, приложенный base asset)
            token_amount: количество token, которое caller заранее
                разрешил списать пулу (increase_allowance)

        Raises:
            AlreadyInitialized: claim_supply != 0
            DepositAmountZero: base_amount == 0 или token_amount == 0
            TransferFailed: списание base или token не удалось
        """
        validate_amount("token_amount", token_amount)
        base_amount = ctx.value

        with self._operation("init", ctx):
            if self._state.is_initialized:
                raise AlreadyInitialized(
                    f"Pool {self.address} already has liquidity "
                    f"(claim_supply={self._state.claim_supply})",
                    details={"claim_supply": self._state.claim_supply},
                )
            if base_amount == 0 or token_amount == 0:
                raise DepositAmountZero(
                    "init requires non-zero base and token amounts",
                    details={"base_amount": base_amount, "token_amount": token_amount},
                )
            self._require_base_funds(ctx)

            # Effects
            self._state.credit_reserves(base_amount, token_amount)
            self._state.claims.mint(ctx.caller, base_amount)

            # Interactions
            self._settle_deposit(ctx, token_amount)

        logger.info(
            f"Pool {self.address} initialized by {ctx.caller}: "
            f"base={base_amount}, token={token_amount}"
        )
        self._emit(
            LiquidityInitialized(
                pool_address=self.address,
                provider=ctx.caller,
                base_amount=base_amount,
                token_amount=token_amount,
            )
        )

    def add_liquidity(self, ctx: CallContext, token_amount_max: Amount) -> None:
        """Пропорциональный депозит в инициализированный пул.

        base_amount = ctx.value.
        token_required = floor(base_amount * token_reserve / base_reserve)
        lp_minted      = floor(base_amount * claim_supply  / base_reserve)

        С caller списывается ровно token_required; token_amount_max —
        потолок, защищающий от сдвига соотношения резервов.

        Raises:
            DepositAmountZero: base_amount == 0 или token_amount_max == 0
            PoolNotInitialized: claim_supply == 0
            SlippageExceeded: token_required > token_amount_max
            TransferFailed: списание base или token не удалось
        """
        validate_amount("token_amount_max", token_amount_max)
        base_amount = ctx.value

        with self._operation("add_liquidity", ctx):
            if base_amount == 0 or token_amount_max == 0:
                raise DepositAmountZero(
                    "add_liquidity requires non-zero base amount and token_amount_max",
                    details={"base_amount": base_amount, "token_amount_max": token_amount_max},
                )
            self._require_initialized("add_liquidity")
            self._require_base_funds(ctx)

            quote = self._quote_deposit(base_amount)
            if quote.token_required > token_amount_max:
                raise SlippageExceeded(
                    f"token_required {quote.token_required} exceeds "
                    f"token_amount_max {token_amount_max}",
                    details={
                        "token_required": quote.token_required,
                        "token_amount_max": token_amount_max,
                    },
                )

            # Effects
            self._state.credit_reserves(base_amount, quote.token_required)
            self._state.claims.mint(ctx.caller, quote.lp_minted)

            # Interactions
            self._settle_deposit(ctx, quote.token_required)

        logger.info(
            f"Liquidity added by {ctx.caller}: base={base_amount}, "
            f"token={quote.token_required}, lp_minted={quote.lp_minted}"
        )
        self._emit(
            LiquidityAdded(
                pool_address=self.address,
                provider=ctx.caller,
                base_amount=base_amount,
                token_required=quote.token_required,
                lp_minted=quote.lp_minted,
            )
        )

    def remove_liquidity(self, ctx: CallContext, lp_amount: Amount) -> None:
        """Пропорциональный вывод ликвидности.

        base_out  = floor(lp_amount * base_reserve  / claim_supply)
        token_out = floor(lp_amount * token_reserve / claim_supply)

        Вывод всего claim_supply возвращает пул в UNINITIALIZED с нулевыми
        резервами; после этого снова допустим init.

        Raises:
            WithdrawAmountZero: lp_amount == 0
            PoolNotInitialized: claim_supply == 0
            InsufficientClaim: баланс claim caller меньше lp_amount
            TransferFailed: выплата base или token не удалась
            ValueError: к вызову приложен value
        """
        validate_amount("lp_amount", lp_amount)
        self._require_no_value(ctx, "remove_liquidity")

        with self._operation("remove_liquidity", ctx):
            if lp_amount == 0:
                raise WithdrawAmountZero(
                    "The amount of LP to withdraw should be greater than 0"
                )
            self._require_initialized("remove_liquidity")

            balance = self._state.claims.balance_of(ctx.caller)
            if balance < lp_amount:
                raise InsufficientClaim(
                    f"Claim balance {balance} of {ctx.caller} is below {lp_amount}",
                    details={"holder": ctx.caller, "balance": balance, "requested": lp_amount},
                )

            quote = self._quote_withdrawal(lp_amount)
            self._require_pool_funds(quote)

            # Effects
            self._state.claims.burn(ctx.caller, lp_amount)
            self._state.debit_reserves(quote.base_out, quote.token_out)

            # Interactions
            self._settle_withdrawal(ctx.caller, quote)

        logger.info(
            f"Liquidity removed by {ctx.caller}: lp={lp_amount}, "
            f"base_out={quote.base_out}, token_out={quote.token_out}"
        )
        self._emit(
            LiquidityRemoved(
                pool_address=self.address,
                provider=ctx.caller,
                lp_amount=lp_amount,
                base_out=quote.base_out,
                token_out=quote.token_out,
            )
        )

    # =========================================================================
    # CLAIM TOKEN OPERATIONS
    # =========================================================================

    def transfer(self, ctx: CallContext, recipient: str, amount: Amount) -> None:
        """Перевод claim-токенов caller → recipient. Резервы не меняются.

        Raises:
            ClaimAmountZero: amount == 0
            InsufficientClaim: баланс caller меньше amount
            ValueError: к вызову приложен value
        """
        validate_amount("amount", amount)
        self._require_no_value(ctx, "transfer")

        with self._operation("transfer", ctx):
            if amount == 0:
                raise ClaimAmountZero("Claim transfer amount must be greater than 0")
            self._state.claims.transfer(ctx.caller, recipient, amount)

        self._emit(
            ClaimTransferred(
                pool_address=self.address,
                sender=ctx.caller,
                recipient=recipient,
                amount=amount,
            )
        )

    def approve(self, ctx: CallContext, spender: str, amount: Amount) -> None:
        """Разрешение spender переводить до amount claim-токенов caller."""
        validate_amount("amount", amount)
        self._require_no_value(ctx, "approve")

        with self._operation("approve", ctx):
            self._state.claims.approve(ctx.caller, spender, amount)

    def transfer_from(
        self, ctx: CallContext, owner: str, recipient: str, amount: Amount
    ) -> None:
        """Перевод claim-токенов owner → recipient по allowance caller.

        Raises:
            ClaimAmountZero: amount == 0
            InsufficientAllowance: allowance caller над owner меньше amount
            InsufficientClaim: баланс owner меньше amount
            ValueError: к вызову приложен value
        """
        validate_amount("amount", amount)
        self._require_no_value(ctx, "transfer_from")

        with self._operation("transfer_from", ctx):
            if amount == 0:
                raise ClaimAmountZero("Claim transfer amount must be greater than 0")
            self._state.claims.spend_allowance(owner, ctx.caller, amount)
            self._state.claims.transfer(owner, recipient, amount)

        self._emit(
            ClaimTransferred(
                pool_address=self.address,
                sender=owner,
                recipient=recipient,
                amount=amount,
            )
        )

    # =========================================================================
    # READ-ONLY ACCESSORS
    # =========================================================================

    def get_token_ledger_address(self) -> str:
        return self._token.address

    def get_base_reserve(self) -> Amount:
        return self._state.base_reserve

    def get_token_reserve(self) -> Amount:
        return self._state.token_reserve

    def get_claim_supply(self) -> Amount:
        return self._state.claim_supply

    def get_claim_balance(self, depositor: str) -> Amount:
        return self._state.claims.balance_of(depositor)

    def get_base_balance(self) -> Amount:
        """Баланс адреса пула в base ledger (не путать с учётным резервом)."""
        return self._base.balance_of(self.address)

    def balance_of(self, holder: str) -> Amount:
        return self._state.claims.balance_of(holder)

    def total_supply(self) -> Amount:
        return self._state.claim_supply

    def allowance(self, owner: str, spender: str) -> Amount:
        return self._state.claims.allowance(owner, spender)

    @property
    def phase(self) -> PoolPhase:
        return self._state.phase

    def snapshot(self) -> PoolSnapshot:
        return self._state.snapshot()

    def preview_add_liquidity(self, base_amount: Amount) -> DepositQuote:
        """Котировка депозита той же математикой, что и add_liquidity.

        Raises:
            DepositAmountZero: base_amount == 0
            PoolNotInitialized: claim_supply == 0
        """
        validate_amount("base_amount", base_amount)
        if base_amount == 0:
            raise DepositAmountZero("Cannot preview a zero deposit")
        self._require_initialized("preview_add_liquidity")
        return self._quote_deposit(base_amount)

    def preview_remove_liquidity(self, lp_amount: Amount) -> WithdrawalQuote:
        """Котировка вывода той же математикой, что и remove_liquidity.

        Raises:
            WithdrawAmountZero: lp_amount == 0
            PoolNotInitialized: claim_supply == 0
            InsufficientClaim: lp_amount > claim_supply
        """
        validate_amount("lp_amount", lp_amount)
        if lp_amount == 0:
            raise WithdrawAmountZero("Cannot preview a zero withdrawal")
        self._require_initialized("preview_remove_liquidity")
        if lp_amount > self._state.claim_supply:
            raise InsufficientClaim(
                f"lp_amount {lp_amount} exceeds claim supply {self._state.claim_supply}"
            )
        return self._quote_withdrawal(lp_amount)

    # =========================================================================
    # INTERNALS: TRANSACTION / GUARD
    # =========================================================================

    @contextmanager
    def _operation(self, name: str, ctx: CallContext) -> Iterator[None]:
        """Reentrancy guard + откат PoolState при любом исключении."""
        if self._active_operation is not None:
            logger.warning(
                f"Reentrant call to {name} by {ctx.caller} rejected "
                f"while {self._active_operation} is executing"
            )
            raise ReentrantCall(
                f"{name} called while {self._active_operation} is executing",
                details={"operation": name, "active_operation": self._active_operation},
            )

        self._active_operation = name
        before = self._state.snapshot()
        try:
            yield
            if self.config.verify_invariants:
                self._state.check_invariants()
        except Exception as exc:
            self._state.restore(before)
            code = exc.code if isinstance(exc, LiquidityError) else type(exc).__name__
            logger.warning(f"{name} by {ctx.caller} failed and was rolled back: {code}: {exc}")
            raise
        finally:
            self._active_operation = None

    @staticmethod
    def _require_no_value(ctx: CallContext, operation: str) -> None:
        """Только init и add_liquidity принимают приложенный base asset."""
        if ctx.value != 0:
            raise ValueError(f"{operation} does not accept attached value (got {ctx.value})")

    def _require_initialized(self, operation: str) -> None:
        if not self._state.is_initialized:
            raise PoolNotInitialized(f"{operation} requires an initialized pool")

    def _require_base_funds(self, ctx: CallContext) -> None:
        """Приложенный value должен быть покрыт балансом caller в base ledger."""
        available = self._base.balance_of(ctx.caller)
        if available < ctx.value:
            raise TransferFailed(
                f"Attached value {ctx.value} exceeds base balance {available} of {ctx.caller}",
                details={"caller": ctx.caller, "value": ctx.value, "available": available},
            )

    def _require_pool_funds(self, quote: WithdrawalQuote) -> None:
        """Балансы пула в ledger-ах должны покрывать обе выплаты."""
        base_held = self._base.balance_of(self.address)
        token_held = self._token.balance_of(self.address)
        if base_held < quote.base_out or token_held < quote.token_out:
            raise TransferFailed(
                f"Pool {self.address} cannot cover payout "
                f"({quote.base_out}, {quote.token_out}) from ({base_held}, {token_held})",
                details={
                    "base_out": quote.base_out,
                    "token_out": quote.token_out,
                    "base_held": base_held,
                    "token_held": token_held,
                },
            )

    def _quote_deposit(self, base_amount: Amount) -> DepositQuote:
        return quote_deposit(
            base_amount=base_amount,
            base_reserve=self._state.base_reserve,
            token_reserve=self._state.token_reserve,
            claim_supply=self._state.claim_supply,
        )

    def _quote_withdrawal(self, lp_amount: Amount) -> WithdrawalQuote:
        return quote_withdrawal(
            lp_amount=lp_amount,
            base_reserve=self._state.base_reserve,
            token_reserve=self._state.token_reserve,
            claim_supply=self._state.claim_supply,
        )

    # =========================================================================
    # INTERNALS: INTERACTIONS
    # =========================================================================

    def _settle_deposit(self, ctx: CallContext, token_amount: Amount) -> None:
        """Pull token, затем списание value. При отказе списания token возвращается."""
        self._pull_token(ctx.caller, token_amount)
        try:
            self._collect_base(ctx)
        except LiquidityError as failure:
            if token_amount:
                self._reverse(
                    f"token refund {token_amount} to {ctx.caller}",
                    lambda: self._token.transfer(self.address, ctx.caller, token_amount),
                    failure,
                    stranded={"refund_failed": token_amount},
                )
            raise

    def _settle_withdrawal(self, recipient: str, quote: WithdrawalQuote) -> None:
        """Выплата base, затем token. При отказе выплаты token base возвращается в пул."""
        self._pay_base(recipient, quote.base_out)
        try:
            self._pay_token(recipient, quote.token_out)
        except LiquidityError as failure:
            if quote.base_out:
                self._reverse(
                    f"base reclaim {quote.base_out} from {recipient}",
                    lambda: self._base.transfer(recipient, self.address, quote.base_out),
                    failure,
                    stranded={"reclaim_failed": quote.base_out},
                )
            raise

    def _reverse(
        self,
        description: str,
        call: Callable[[], bool],
        failure: LiquidityError,
        stranded: Dict[str, Amount],
    ) -> None:
        """Компенсация уже выполненного перевода после отказа следующего.

        Если компенсация не удалась, вызывающий получает TransferFailed с
        обеими причинами и застрявшим количеством в details.
        """
        try:
            self._call_ledger(description, call)
        except LiquidityError as exc:
            logger.error(f"{description} failed after {failure.code}: {exc}")
            raise TransferFailed(
                f"{failure.message}; {exc.message}",
                details={**failure.details, **stranded},
            ) from exc

    def _collect_base(self, ctx: CallContext) -> None:
        if ctx.value == 0:
            return
        self._call_ledger(
            f"base collect {ctx.value} from {ctx.caller}",
            lambda: self._base.transfer(ctx.caller, self.address, ctx.value),
        )

    def _pull_token(self, sender: str, amount: Amount) -> None:
        if amount == 0:
            return
        self._call_ledger(
            f"token pull {amount} from {sender}",
            lambda: self._token.transfer_from(self.address, sender, self.address, amount),
        )

    def _pay_base(self, recipient: str, amount: Amount) -> None:
        if amount == 0:
            return
        self._call_ledger(
            f"base payout {amount} to {recipient}",
            lambda: self._base.transfer(self.address, recipient, amount),
        )

    def _pay_token(self, recipient: str, amount: Amount) -> None:
        if amount == 0:
            return
        self._call_ledger(
            f"token payout {amount} to {recipient}",
            lambda: self._token.transfer(self.address, recipient, amount),
        )

    @staticmethod
    def _call_ledger(description: str, call: Callable[[], bool]) -> None:
        """Вызов ledger: False или чужое исключение → TransferFailed.

        LiquidityError (например, ReentrantCall из вложенного вызова)
        пробрасывается как есть.
        """
        try:
            ok = call()
        except LiquidityError:
            raise
        except Exception as exc:
            raise TransferFailed(f"{description} raised {type(exc).__name__}: {exc}") from exc
        if not ok:
            raise TransferFailed(f"{description} failed")

    def _emit(self, event: PoolEvent) -> None:
        try:
            self._sink.emit(event)
        except Exception:
            logger.exception(f"Event sink failed on {type(event).__name__}")

    def __repr__(self) -> str:
        return f"LiquidityEngine(address={self.address!r}, state={self._state!r})"
