"""Interactive CLI application."""
import logging
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt, IntPrompt, Confirm
from rich.table import Table

from learn_tracker.config import DEBUG, DEFAULT_DB_PATH
from learn_tracker.dashboard import (
    flashcard_counts, get_mastery_color, get_mastery_label, summarize, topics_by_category,
)
from learn_tracker.errors import EmptyDeckError, LearnTrackerError
from learn_tracker.flashcards import replace_card
from learn_tracker.library import (
    add_flashcard, add_topic, delete_topic, topic_title, update_topic,
)
from learn_tracker.models import CATEGORIES, DEFAULT_CATEGORY, create_flashcard, create_topic
from learn_tracker.session import DeckMode, QuizSession, select_deck
from learn_tracker.sm2 import RATINGS
from learn_tracker.store import SqliteStore

console = Console()

EXIT_WORDS = {"q", "menu"}


class SessionExitRequested(Exception):
    """Raised when the user types q/menu inside a session."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer is not None and answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def session_int_prompt(prompt: str, choices: list) -> int:
    """Ask until one of *choices* is entered; q/menu leaves the session."""
    while True:
        answer = session_prompt(f"{prompt} [{'/'.join(choices)}]").strip()
        if answer in choices:
            return int(answer)
        console.print("[red]Please select one of the available options[/red]")


def setup_logging(debug: bool = DEBUG) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def show_welcome():
    console.print(Panel(
        "[bold]Learning Hub[/bold]\n[dim]Track what you've learned and quiz yourself with spaced repetition[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("topics", "List topics by category"),
        ("add-topic", "Record something you've learned"),
        ("edit-topic", "Edit a topic or its mastery"),
        ("delete-topic", "Delete a topic and its flashcards"),
        ("add-card", "Add a flashcard to a topic"),
        ("quiz", "Review due flashcards"),
        ("dashboard", "Progress summary"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def choose_topic(topics: list):
    if not topics:
        console.print("[yellow]No topics yet. Start by adding something you've learned![/yellow]")
        return None
    for i, topic in enumerate(topics, 1):
        console.print(f"  [cyan]{i}[/cyan]) {topic.title} [dim]({topic.category})[/dim]")
    choice = IntPrompt.ask("Select topic", choices=[str(i) for i in range(1, len(topics) + 1)])
    return topics[choice - 1]


def ask_category(default: str = CATEGORIES[0]) -> str:
    for i, category in enumerate(CATEGORIES, 1):
        console.print(f"  [cyan]{i:>2}[/cyan]) {category}")
    answer = Prompt.ask("Category (number or name)", default=default).strip()
    if answer.isdigit() and 1 <= int(answer) <= len(CATEGORIES):
        return CATEGORIES[int(answer) - 1]
    return answer or DEFAULT_CATEGORY


def ask_mastery(default: int = 0) -> int:
    while True:
        mastery = IntPrompt.ask("Mastery (0-100)", default=default)
        if 0 <= mastery <= 100:
            return mastery
        console.print("[red]Mastery must be between 0 and 100[/red]")


def run_quiz_session(store, topics: list, cards: list, mode: DeckMode = DeckMode.DUE,
                     clock=datetime.now) -> int:
    """Drive a QuizSession from the terminal. Returns the number of cards reviewed."""
    if not cards:
        console.print("[yellow]No flashcards yet. Add some to your topics to start quizzing![/yellow]")
        return 0

    collection = list(cards)

    def persist(updated):
        nonlocal collection
        collection = replace_card(collection, updated)
        store.save_flashcards(collection)

    session = QuizSession(clock=clock, on_rated=persist, mode=mode)
    try:
        session.start(select_deck(cards, mode, clock()))
    except EmptyDeckError:
        console.print("[green]All caught up![/green] No cards are due for review right now.")
        if not Confirm.ask("Practice all cards anyway?", default=False):
            return 0
        session.switch_mode(DeckMode.ALL, cards, clock())

    console.print(f"\n[bold]Flashcard Quiz[/bold] — {len(session.deck)} cards\n")
    rating_help = ", ".join(f"{q}={label.lower()}" for label, q, _ in RATINGS)
    while not session.is_complete:
        card = session.current_card
        console.print(Panel(
            card.question,
            title=f"Card {session.index + 1}/{len(session.deck)} · {topic_title(topics, card.topic_id)}",
            border_style="cyan",
        ))
        session_prompt("[dim]Press Enter to reveal answer[/dim]", default="", show_default=False)
        session.flip()
        console.print(Panel(card.answer, title="Answer", border_style="green"))
        quality = session_int_prompt(
            f"How well did you know this? ({rating_help})",
            choices=["0", "1", "2", "3", "4", "5"],
        )
        updated = session.rate(quality)
        console.print(f"[dim]Next review in {updated.interval} day(s)[/dim]\n")

    count = session.reviewed_count
    console.print(f"[bold green]Great job![/bold green] You've reviewed {count} card{'s' if count != 1 else ''}.")
    return count


def cmd_topics(store):
    topics = store.load_topics()
    if not topics:
        console.print("[yellow]No topics yet. Start by adding something you've learned![/yellow]")
        return
    counts = flashcard_counts(store.load_flashcards())
    for category, category_topics in topics_by_category(topics).items():
        table = Table(title=f"{category} ({len(category_topics)})", title_justify="left")
        table.add_column("Topic", style="cyan")
        table.add_column("Description")
        table.add_column("Cards", justify="right")
        table.add_column("Mastery", justify="right")
        for topic in category_topics:
            color = get_mastery_color(topic.mastery)
            table.add_row(
                topic.title,
                topic.description,
                str(counts.get(topic.id, 0)),
                f"[{color}]{topic.mastery}%[/{color}]",
            )
        console.print(table)


def cmd_add_topic(store):
    title = Prompt.ask("Title").strip()
    if not title:
        console.print("[red]A topic needs a title.[/red]")
        return
    description = Prompt.ask("Description", default="")
    category = ask_category()
    mastery = ask_mastery()
    notes = Prompt.ask("Notes (markdown)", default="")
    topic = create_topic(title, description, category, mastery, notes, now=datetime.now())
    store.save_topics(add_topic(store.load_topics(), topic))
    console.print(f"[green]Added topic '{topic.title}'.[/green]")


def cmd_edit_topic(store):
    topics = store.load_topics()
    topic = choose_topic(topics)
    if topic is None:
        return
    topic.title = Prompt.ask("Title", default=topic.title).strip() or topic.title
    topic.description = Prompt.ask("Description", default=topic.description)
    topic.category = ask_category(default=topic.category)
    topic.mastery = ask_mastery(default=topic.mastery)
    store.save_topics(update_topic(topics, topic))
    console.print(f"[green]Updated '{topic.title}'.[/green]")


def cmd_delete_topic(store):
    topics = store.load_topics()
    topic = choose_topic(topics)
    if topic is None:
        return
    cards = store.load_flashcards()
    count = flashcard_counts(cards).get(topic.id, 0)
    if not Confirm.ask(f"Delete \"{topic.title}\" and its {count} flashcards?", default=False):
        return
    topics, cards = delete_topic(topics, cards, topic.id)
    store.save_all(topics, cards)
    console.print(f"[green]Deleted '{topic.title}'.[/green]")


def cmd_add_card(store):
    topics = store.load_topics()
    topic = choose_topic(topics)
    if topic is None:
        return
    question = Prompt.ask("Question").strip()
    answer = Prompt.ask("Answer").strip()
    if not question or not answer:
        console.print("[red]Both question and answer are required.[/red]")
        return
    card = create_flashcard(topic.id, question, answer, now=datetime.now())
    store.save_flashcards(add_flashcard(topics, store.load_flashcards(), card))
    console.print(f"[green]Added flashcard to '{topic.title}'.[/green]")


def cmd_quiz(store):
    run_quiz_session(store, store.load_topics(), store.load_flashcards())


def cmd_dashboard(store):
    topics = store.load_topics()
    stats = summarize(topics, store.load_flashcards(), datetime.now())
    mastery = stats["average_mastery"]
    color = get_mastery_color(mastery)
    bar_filled = int(mastery / 5)
    bar = f"[{color}]{'█' * bar_filled}{'░' * (20 - bar_filled)}[/{color}]"
    console.print(Panel(
        f"Topics: [bold]{stats['total_topics']}[/bold]  |  "
        f"Flashcards: [bold]{stats['total_cards']}[/bold]  |  "
        f"To Review: [bold]{stats['cards_to_review']}[/bold]\n\n"
        f"Mastery: [bold]{mastery}%[/bold] {bar} [{color}]{get_mastery_label(mastery)}[/{color}]",
        title="Learning Dashboard", border_style="blue",
    ))
    if topics:
        weakest = min(topics, key=lambda t: t.mastery)
        if weakest.mastery < 50:
            console.print(f"\n  [yellow]Recommendation: Focus on {weakest.title}[/yellow]")


COMMANDS = {
    "topics": cmd_topics,
    "add-topic": cmd_add_topic,
    "edit-topic": cmd_edit_topic,
    "delete-topic": cmd_delete_topic,
    "add-card": cmd_add_card,
    "quiz": cmd_quiz,
    "dashboard": cmd_dashboard,
}


def main():
    setup_logging()
    store = SqliteStore(DEFAULT_DB_PATH)
    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="quiz").strip().lower()
        if choice in ("quit", "exit", "q"):
            console.print("[dim]Keep learning![/dim]")
            break
        command = COMMANDS.get(choice)
        if command is None:
            console.print("[red]Unknown command. Try again.[/red]")
            continue
        try:
            command(store)
        except SessionExitRequested:
            console.print("[dim]Back to menu. Reviewed cards are saved.[/dim]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except LearnTrackerError as e:
            console.print(f"[red]{e}[/red]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
