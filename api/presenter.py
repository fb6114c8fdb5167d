"""Turn games into the view shown to players."""

from api.schemas import CardResponse, GameStateResponse, HandResponse
from core.cards import Card
from core.game import BlackjackGame, BlackjackStage
from core.hand import Hand

INSTRUCTIONS = "Send hit to take a card, stand to hold, or quit to give up."


def pluralize(word: str, count: int) -> str:
    """Add an 's' unless there is exactly one."""
    return word if count == 1 else f"{word}s"


def _card_to_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(rank=card.rank.name, suit=card.suit.value, text=str(card))


def _hand_to_response(hand: Hand) -> HandResponse:
    """Convert a Hand to HandResponse."""
    values = hand.values
    return HandResponse(
        cards=[_card_to_response(c) for c in hand.cards],
        values=list(values.totals),
        display=str(values),
        is_blackjack=hand.is_blackjack,
        is_busted=hand.is_busted,
    )


def game_colour(game: BlackjackGame) -> str:
    """Pick a colour for the game: in progress, won, lost or tied."""
    if game.stage != BlackjackStage.DONE:
        return "yellow"
    if game.balance_change < 0:
        return "red"
    if game.balance_change > 0:
        return "green"
    return "orange"


def game_description(game: BlackjackGame) -> str:
    """Describe the result of a game, or how to play while it is running."""
    if game.stage != BlackjackStage.DONE:
        return INSTRUCTIONS

    amount = abs(game.balance_change)
    coins = pluralize("coin", amount)
    if game.surrendered:
        return f"You surrendered and lost **{amount}** {coins}."
    if game.amount_won < game.bet:
        return f"You lost **{amount}** {coins}, better luck next time!"
    if game.amount_won > game.bet:
        return f"You won **{amount}** {coins}, keep your win streak going!"
    return "Tied! You didn't win nor lose any coins, try again!"


def game_state_response(game: BlackjackGame, balance: int | None = None) -> GameStateResponse:
    """Convert game state to response."""
    return GameStateResponse(
        player_id=game.player_id,
        channel_id=game.channel_id,
        stage=game.stage.name,
        bet=game.bet,
        player=_hand_to_response(game.player_hand),
        dealer=_hand_to_response(game.dealer_hand),
        surrendered=game.surrendered,
        amount_won=game.amount_won,
        balance_change=game.balance_change,
        outcome=game.outcome.value if game.outcome else None,
        colour=game_colour(game),
        description=game_description(game),
        balance=balance,
    )
