"""Blackjack game engine with state machine."""

from random import Random
from typing import Callable

from transitions import Machine

from core.cards import Card, Deck, new_shuffled_deck
from core.errors import EngineInvariantError
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import BlackjackAction, BlackjackStage, GamePhase, Outcome
from core.hand import Hand, HandValue, compare_hands
from core.strategy.dealer import play_dealer
from core.strategy.rules import RuleSet


class BlackjackGame:
    """
    One player's game against the dealer, from the deal to settlement.

    The game owns its deck and both hands and only changes through ``deal``
    and the player actions. Illegal actions (anything once the player's turn
    is over) are ignored and reported by returning False.
    """

    # State machine states
    STATES = [p.name.lower() for p in GamePhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal_complete", "source": "dealing", "dest": "player_turn"},
        {"trigger": "natural_dealt", "source": "dealing", "dest": "done"},
        {"trigger": "player_hits", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "player_busts", "source": "player_turn", "dest": "done"},
        {"trigger": "player_quits", "source": "player_turn", "dest": "done"},
        {"trigger": "player_stands", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "done"},
    ]

    def __init__(
        self,
        bet: int,
        player_id: str,
        channel_id: str,
        rules: RuleSet | None = None,
        deck: Deck | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a game; no cards are dealt until ``deal`` is called.

        Args:
            bet: Stake in coins, fixed for the whole game
            player_id: Owner of the game
            channel_id: Where the game is being shown
            rules: Table rules (uses defaults if not provided)
            deck: Deck to play from (a fresh shuffled deck if not provided)
            rng: Random number generator for the fresh deck
        """
        if isinstance(bet, bool) or not isinstance(bet, int) or bet < 1:
            raise ValueError("bet must be a positive number of coins")

        self._bet = bet
        self.player_id = player_id
        self.channel_id = channel_id
        self.rules = rules or RuleSet()
        self.deck = deck if deck is not None else new_shuffled_deck(rng)

        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.surrendered = False
        self.amount_won = 0
        self.outcome: Outcome | None = None
        self.events = EventEmitter()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="dealing",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def phase(self) -> GamePhase:
        """Get the internal state machine phase."""
        return GamePhase[self._machine_state.upper()]  # type: ignore

    @property
    def stage(self) -> BlackjackStage:
        """Get the caller-visible stage."""
        return self.phase.stage

    @property
    def is_done(self) -> bool:
        """Check if the game has been settled."""
        return self.stage == BlackjackStage.DONE

    @property
    def bet(self) -> int:
        """Return the stake."""
        return self._bet

    @property
    def player_cards(self) -> list[Card]:
        """Return a copy of the player's cards."""
        return list(self.player_hand.cards)

    @property
    def dealer_cards(self) -> list[Card]:
        """Return a copy of the dealer's cards."""
        return list(self.dealer_hand.cards)

    @property
    def player_value(self) -> HandValue:
        """Return the player's current totals."""
        return self.player_hand.values

    @property
    def dealer_value(self) -> HandValue:
        """Return the dealer's current totals."""
        return self.dealer_hand.values

    @property
    def balance_change(self) -> int:
        """Return the net coins won (negative when lost)."""
        return self.amount_won - self._bet

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def deal(self) -> None:
        """Deal two cards each (player, player, dealer, dealer) and settle naturals."""
        if self.phase != GamePhase.DEALING:
            raise EngineInvariantError(f"Cannot deal in phase {self.phase.name}")

        self.events.emit_new(
            EventType.GAME_STARTED,
            player_id=self.player_id,
            channel_id=self.channel_id,
            bet=self._bet,
        )

        self._deal_card_to_hand(self.player_hand)
        self._deal_card_to_hand(self.player_hand)
        self._deal_card_to_hand(self.dealer_hand)
        self._deal_card_to_hand(self.dealer_hand)

        if not self.player_hand.is_blackjack:
            self.deal_complete()
            return

        self.events.emit_new(EventType.PLAYER_BLACKJACK)
        if self.dealer_hand.is_blackjack:
            self._settle(Outcome.PUSH, self._bet)
        else:
            self._settle(Outcome.BLACKJACK, self.rules.natural_winnings(self._bet))
        self.natural_dealt()

    def _deal_card_to_hand(self, hand: Hand) -> Card:
        """Deal a card to a hand."""
        card = self.deck.draw()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            hand="dealer" if hand is self.dealer_hand else "player",
            hand_value=hand.value,
        )
        return card

    def perform(self, action: BlackjackAction | str) -> bool:
        """
        Apply a player action.

        Returns:
            True if the action was applied, False if the game is not waiting
            for the player
        """
        actions = {
            BlackjackAction.HIT: self.hit,
            BlackjackAction.STAND: self.stand,
            BlackjackAction.QUIT: self.quit,
        }
        return actions[BlackjackAction(action)]()

    def hit(self) -> bool:
        """Player hits (takes another card)."""
        if self.phase != GamePhase.PLAYER_TURN:
            return False

        self._deal_card_to_hand(self.player_hand)
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=self.player_hand.value)

        if self.player_hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.player_hand.value)
            self._settle(Outcome.BUST, 0)
            self.player_busts()
            return True

        self.player_hits()  # Stay in player turn
        return True

    def stand(self) -> bool:
        """Player stands; the dealer plays and the game is settled."""
        if self.phase != GamePhase.PLAYER_TURN:
            return False

        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.player_hand.value)
        self.player_stands()

        play_dealer(
            self.dealer_hand,
            self.deck,
            self.rules,
            on_draw=lambda card: self.events.emit_new(
                EventType.DEALER_HITS,
                card=str(card),
                hand_value=self.dealer_hand.value,
            ),
        )

        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)

        result = compare_hands(self.player_hand, self.dealer_hand)
        if result > 0:
            self._settle(Outcome.WIN, self._bet * 2)
        elif result < 0:
            self._settle(Outcome.LOSE, 0)
        else:
            self._settle(Outcome.PUSH, self._bet)

        self.dealer_done()
        return True

    def quit(self) -> bool:
        """Player forfeits the stake."""
        if self.phase != GamePhase.PLAYER_TURN:
            return False

        self.surrendered = True
        self.events.emit_new(EventType.PLAYER_QUIT, hand_value=self.player_hand.value)
        self._settle(Outcome.SURRENDER, 0)
        self.player_quits()
        return True

    def _settle(self, outcome: Outcome, amount_won: int) -> None:
        """Record the payout for the game."""
        if self.outcome is not None or self.phase == GamePhase.DONE:
            raise EngineInvariantError("Game has already been settled")
        if amount_won < 0:
            raise EngineInvariantError(f"Negative payout: {amount_won}")

        self.outcome = outcome
        self.amount_won = amount_won

        if amount_won > self._bet:
            self.events.emit_new(EventType.PLAYER_WINS, amount=amount_won - self._bet)
        elif amount_won < self._bet:
            self.events.emit_new(EventType.PLAYER_LOSES, amount=self._bet - amount_won)
        else:
            self.events.emit_new(EventType.PUSH)

        self.events.emit_new(
            EventType.GAME_ENDED,
            outcome=outcome.value,
            amount_won=amount_won,
            balance_change=amount_won - self._bet,
        )

    def __repr__(self) -> str:
        return (
            f"BlackjackGame(player_id={self.player_id!r}, bet={self._bet}, "
            f"phase={self.phase.name}, player={self.player_hand!r}, "
            f"dealer={self.dealer_hand!r})"
        )
