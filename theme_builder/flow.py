"""
flow.py

Responsibility: The ordered question pipeline that customises the theme.

Each step asks one question, dispatches the answer to the transformation
modules, and returns a new `ThemeAnswers` with the answer recorded. Steps
with answers that change files (tags, pruning, instances) run first; plain
token replacements follow; the final step decides between starting over and
finishing.

Concerns stay isolated:
- Answer parsing and retry: `answers.py`
- Tag blocks: `blocks.py`
- File/directory removal: `pruner.py`
- Repeated prototype files: `instances.py`
- Token replacement: `substitution.py`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Callable

from theme_builder.answers import IDENTIFIER_HINT, URL_HINT, Prompter, Question, parse_identifier, parse_url
from theme_builder.blocks import resolve_tag
from theme_builder.config import BuilderConfig
from theme_builder.console import EXPLOSION, Style, console, plain, styled
from theme_builder.instances import PostTypeSpec, generate_instances
from theme_builder.pruner import prune_or_keep, remove_tree
from theme_builder.substitution import FileSet, FilesystemError, ReplacementRule, apply_replacement

logger = logging.getLogger(__name__)


class FlowError(RuntimeError):
    pass


@dataclass(frozen=True)
class ThemeAnswers:
    """Answers collected so far in one pass of the flow."""

    vip: bool | None = None
    languages: bool | None = None
    custom_post_types: bool | None = None
    post_types: tuple[PostTypeSpec, ...] = ()
    sass: bool | None = None
    compass: bool | None = None
    gulp: bool | None = None
    title: str | None = None
    theme_uri: str | None = None
    author: str | None = None
    author_uri: str | None = None
    prefix: str | None = None
    description: str | None = None
    change_answers: bool | None = None


@dataclass(frozen=True)
class FlowContext:
    root: Path
    config: BuilderConfig
    prompter: Prompter
    file_set: FileSet = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "file_set", FileSet.from_config(self.root, self.config))


StepAction = Callable[[FlowContext, ThemeAnswers], ThemeAnswers]


@dataclass(frozen=True)
class Step:
    name: str
    run: StepAction
    when: Callable[[ThemeAnswers], bool] | None = None

    def applies(self, answers: ThemeAnswers) -> bool:
        return self.when is None or self.when(answers)


class FlowState(str, Enum):
    READY = "ready"
    RUNNING = "running"
    FINALIZED = "finalized"


def _replace(ctx: FlowContext, token: str, value: str) -> None:
    apply_replacement(ReplacementRule(pattern=token, replacement=value), ctx.file_set)


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def show_readme(ctx: FlowContext) -> None:
    readme = ctx.root / ctx.config.readme
    console.print("\n\n")
    if not readme.is_file():
        console.print(styled(f"{ctx.config.readme} not found", Style.RED))
        return
    for line in readme.read_text(encoding="utf-8").splitlines():
        console.print(styled(line, Style.CYAN))


def welcome(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    console.print(
        plain("\n\nTo view the themes readme file please type ")
        + styled("help", Style.MAGENTA)
        + " or "
        + styled("h", Style.MAGENTA)
        + ". To continue building the theme type any key or hit enter.",
        end="",
    )
    if ctx.prompter.read().strip().lower() in ("help", "h"):
        show_readme(ctx)
        console.print(plain("\nPress any key to continue"))
        ctx.prompter.read()
    return answers


def vip(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask_boolean(Question("Will this theme need WordPress VIP theme support?"))
    resolve_tag("VIP", answer, ctx.file_set)
    return replace(answers, vip=answer)


def language_support(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask_boolean(Question("Will this theme need language support?"))
    prune_or_keep("languages", answer, ctx.root)
    resolve_tag("LANG", answer, ctx.file_set)
    return replace(answers, languages=answer)


def custom_post_types(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask_boolean(Question("Will this theme need custom post type support?"))
    created: list[PostTypeSpec] = []
    if answer:
        resolve_tag("CUSTOM-POSTS", answer, ctx.file_set, inverse=True)
        created = generate_instances(ctx.prompter, ctx.file_set, ctx.config.post_types)
    else:
        remove_tree(Path(ctx.config.post_types.prototype).parent, ctx.root)
        resolve_tag("CUSTOM-POSTS", answer, ctx.file_set)
    return replace(answers, custom_post_types=answer, post_types=tuple(created))


def sass(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask_boolean(Question("Would you like to use SASS with this theme?"))
    prune_or_keep("sass", answer, ctx.root)
    resolve_tag("SASSGULP", answer, ctx.file_set, inverse=True)
    if not answer:
        styles = ctx.root / "css" / "styles.css"
        try:
            styles.parent.mkdir(parents=True, exist_ok=True)
            styles.write_text("", encoding="utf-8")
        except OSError as e:
            raise FilesystemError(f"Failed emptying css/styles.css: {e}") from e
    return replace(answers, sass=answer)


def compass(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask_boolean(Question("Would you like to use Compass with this theme?"))
    resolve_tag("COMPASS", answer, ctx.file_set)
    resolve_tag("GULPCOMPASS", answer, ctx.file_set, inverse=True)
    resolve_tag("GULPNONCOMPASS", answer, ctx.file_set)
    prune_or_keep("config.rb", answer, ctx.root)
    return replace(answers, compass=answer)


GULP_NOTES = (
    "\n\nIn order to run Gulp you have to have npm installed.",
    "Please refer to the gulpfile.js file for more information.",
    "To run Gulp open a new Terminal window and cd into the themes root directory",
    "Run npm install and then type gulp.",
)


def gulp(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask_boolean(
        Question(
            "Would you like to use Gulp with this theme?",
            hint="(Gulp allows automating tasks like autoprefixing, concatenation, etc..)",
        )
    )
    prune_or_keep("gulpfile.js", answer, ctx.root)
    prune_or_keep("package.json", answer, ctx.root)
    resolve_tag("GULP", answer, ctx.file_set, inverse=True)
    resolve_tag("NONGULP", answer, ctx.file_set)
    if answer:
        for note in GULP_NOTES:
            console.print(styled(note, Style.MAGENTA))
    return replace(answers, gulp=answer)


def theme_name(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask_text(Question("What is the name of your new theme?"))
    _replace(ctx, "{%= title %}", answer)
    _replace(ctx, "{%= title_capitalize %}", answer.capitalize())
    return replace(answers, title=answer)


def theme_uri(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask(Question("What is the theme URL?", hint=URL_HINT), parse_url)
    _replace(ctx, "{%= theme_uri %}", answer)
    return replace(answers, theme_uri=answer)


def author(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask_text(Question("What is the theme author's name?"))
    _replace(ctx, "{%= author %}", answer)
    return replace(answers, author=answer)


def author_uri(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask(Question("What is the theme authors URL?", hint=URL_HINT), parse_url)
    _replace(ctx, "{%= author_uri %}", answer)
    return replace(answers, author_uri=answer)


def prefix(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask(
        Question("What should the prefix for your theme be?", hint=IDENTIFIER_HINT, inline=True),
        parse_identifier,
    )
    _replace(ctx, "{%= prefix %}", answer)
    _replace(ctx, "{%= prefix_capitalize %}", answer.capitalize())
    return replace(answers, prefix=answer)


def description(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask_text(Question("Please list your themes description"))
    _replace(ctx, "{%= description %}", answer)
    return replace(answers, description=answer)


def change_answers(ctx: FlowContext, answers: ThemeAnswers) -> ThemeAnswers:
    answer = ctx.prompter.ask_boolean(Question("Do you need to change any information?"))
    return replace(answers, change_answers=answer)


def theme_steps() -> list[Step]:
    """The question pipeline, in the order it is asked."""
    return [
        Step("welcome", welcome),
        Step("vip", vip),
        Step("language_support", language_support),
        Step("custom_post_types", custom_post_types),
        Step("sass", sass),
        Step("compass", compass, when=lambda a: bool(a.sass)),
        Step("gulp", gulp),
        Step("theme_name", theme_name),
        Step("theme_uri", theme_uri),
        Step("author", author),
        Step("author_uri", author_uri),
        Step("prefix", prefix),
        Step("description", description),
        Step("change_answers", change_answers),
    ]


# ---------------------------------------------------------------------------
# Flow
# ---------------------------------------------------------------------------


class AnswerFlow:
    """
    Runs the steps in order until the operator is satisfied with the result.

    An affirmative `change_answers` resets the tree through `reset` and runs
    every step again from a blank `ThemeAnswers`; a negative one finalizes the
    flow, after which it cannot run again.
    """

    def __init__(
        self,
        ctx: FlowContext,
        reset: Callable[[], object],
        steps: list[Step] | None = None,
    ) -> None:
        self.ctx = ctx
        self.steps = steps if steps is not None else theme_steps()
        self._reset = reset
        self.state = FlowState.READY
        self.passes = 0

    def run_once(self) -> ThemeAnswers:
        answers = ThemeAnswers()
        for step in self.steps:
            if not step.applies(answers):
                logger.debug("skipping step %s", step.name)
                continue
            logger.debug("running step %s", step.name)
            answers = step.run(self.ctx, answers)
        self.passes += 1
        return answers

    def run(self) -> ThemeAnswers:
        if self.state is FlowState.FINALIZED:
            raise FlowError("The flow has already been finalized.")

        self.state = FlowState.RUNNING
        while True:
            answers = self.run_once()
            if not answers.change_answers:
                break
            self._reset()

        self.finalize()
        return answers

    def finalize(self) -> None:
        driver = self.ctx.config.driver_file
        if driver and remove_tree(driver, self.ctx.root):
            logger.debug("removed driver file %s", driver)
        self.state = FlowState.FINALIZED

        console.print(plain(EXPLOSION))
        console.print(plain("\n\n\nTheme build finished"))
        console.print(plain("\nEnjoy your theme!"))
