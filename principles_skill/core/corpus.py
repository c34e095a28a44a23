"""The fixed, ordered corpus of principles served by the skill."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence


@dataclass(frozen=True, slots=True)
class Principle:
    """A single principle with its short and extended spoken explanations."""

    name: str
    simple: str
    extended: str


def normalize_name(value: str) -> str:
    """Trim and case-fold a principle name for lookups."""
    return value.strip().casefold()


class Corpus:
    """Immutable ordered collection of principles indexed by position and name."""

    def __init__(self, principles: Sequence[Principle]) -> None:
        if not principles:
            raise ValueError("corpus must contain at least one principle")
        self._principles: tuple[Principle, ...] = tuple(principles)
        self._by_name: dict[str, int] = {}
        for index, principle in enumerate(self._principles):
            key = normalize_name(principle.name)
            if key in self._by_name:
                raise ValueError(f"duplicate principle name: {principle.name}")
            self._by_name[key] = index

    def __len__(self) -> int:
        return len(self._principles)

    def __iter__(self) -> Iterator[Principle]:
        return iter(self._principles)

    def __getitem__(self, index: int) -> Principle:
        if not self.is_valid_index(index):
            raise IndexError(f"principle index out of range: {index}")
        return self._principles[index]

    def is_valid_index(self, value: object) -> bool:
        """True when ``value`` is an integer position inside the corpus."""
        # bool is an int subclass but never a meaningful index
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return 0 <= value < len(self._principles)

    def find_index(self, spoken_name: str) -> Optional[int]:
        """Return the index of the principle named ``spoken_name``, if any."""
        return self._by_name.get(normalize_name(spoken_name))

    def next_index(self, index: int) -> int:
        """Return the position after ``index``, wrapping to the start."""
        return (index + 1) % len(self._principles)


PRINCIPLES: tuple[Principle, ...] = (
    Principle(
        name="Integrity",
        simple=(
            "Integrity is the deepest and most core principle of HashiCorp, encompassing "
            "moral, intellectual, personal, and corporate integrity. Integrity requires a "
            "consistency of our thoughts, words, and actions and a dedication to the truth."
        ),
        extended=(
            "<p>Integrity builds trust, upon which the strongest relationships are built. "
            "When we trust others, we are more willing to be open and engage. We must foster "
            "relationships internally to create a friendly, productive, and positive "
            "environment and externally with our users, partners, and customers to drive the "
            "adoption of our tools and products.</p>"
            "<p>When we speak of moral integrity, we are applying the golden rule to treat "
            "others as you would like to be treated. Intellectual integrity demands that we "
            "acknowledge reality and that our words and actions are consistent with our "
            "understanding. Personal and corporate integrity means that we must demand this "
            "standard of every person as well as the collective.</p>"
            "<p>As our core principle there can be no exemptions or compromises. There is no "
            "employee, user, partner, or customer that can be excused or allow us to "
            "compromise our own integrity.</p>"
        ),
    ),
    Principle(
        name="Kindness",
        simple=(
            "Long after we forget the details of an interaction, we remember how we felt. "
            "This extends to our impressions of people, websites, tools, and products. "
            "Producing beautiful work ensures a positive association, and kindness to people "
            "does the same. These associations change the propensity for future "
            "interactions, since nobody wants to feel bad (or work with an asshole)."
        ),
        extended=(
            "<p>Kindness should be extended at every opportunity, to our peers, users, "
            "partners, and customers. An internal environment that is friendly, kind, and "
            "forgiving of mistakes is positive and productive. Kindness externally builds "
            "our social capital, reputation, and makes our customers want to engage with us "
            "in the future.</p>"
            "<p>In the face of our own personal frustration, it is often difficult to "
            "remember that our actions will be received by another thoughtful, emotional "
            "human being. We should assume the best in people, communicate kindly, and "
            "understand that the intention of another’s actions are usually to be helpful "
            "in return. In some cases, we may be the recipients of unkindness. We always "
            "choose to respond with kindness, in the hope that we can move towards a better "
            "communication environment. If this isn’t possible, you may choose to exit the "
            "conversation. We can’t change the unkindness of others, but we can preserve "
            "the kindness of ourselves.</p>"
        ),
    ),
    Principle(
        name="Pragmatism",
        simple=(
            "HashiCorp will always be focused on innovating and pushing the boundaries in an "
            "attempt to deeply impact the status quo. Forward progress requires strong "
            "grounding in reality. For us to effectively change the status quo, we must "
            "understand it however undesirable it may be. It is these practical "
            "considerations rather than the theoretical that demand pragmatism."
        ),
        extended=(
            "<p>When faced with a complex decision, we should always welcome an open "
            "conversation and encourage constructive disagreement so that a broad set of "
            "views are considered. Achieving unanimous agreement among a large group of "
            "individuals is often impossible. To make progress and succeed as a team, "
            "although each of us will sometimes disagree, it is necessary for all of us to "
            "commit to the outcome of a decision and move forward.</p>"
            "<p>Pragmatism is one of the few traits that is shared with the Tao of "
            "HashiCorp, and that is because it should impact every layer of our "
            "thinking.</p>"
        ),
    ),
    Principle(
        name="Humility",
        simple=(
            "Humility starts with acknowledging that our knowledge is imperfect and "
            "incomplete, but not fixed. We can continue to learn and grow but this is an "
            "active process that we must choose to engage in. This growth comes from "
            "constantly seeking feedback, learning, and adapting based on new understanding. "
            "In this context, we must view mistakes as learning opportunities in an active "
            "process of reflection and analysis."
        ),
        extended=(
            "<p>We must avoid overconfidence in our knowledge, but also in the value that we "
            "deliver to the company as individuals and to our customers as an organization. "
            "Through the same active process of learning, reflecting, and adapting, we must "
            "increase the effectiveness of our execution and challenge ourselves to solve "
            "new problems.</p>"
        ),
    ),
    Principle(
        name="Vision",
        simple=(
            "Every action we take moves us in some direction. Vision is a point much farther "
            "than a single action can take us. Having a vision allows us to judge if an "
            "action moves us closer or further from our vision. Without vision, each action "
            "big or small is no better than a random walk in the hope that we end up "
            "somewhere we’d like to be. By having a vision, we try to move in some "
            "direction, rather than moving in no singular direction at all. Vision requires "
            "you to reflect on the big picture; to understand the greater goal behind the "
            "smaller actions."
        ),
        extended=(
            "<p>An organization must be cohesive in its shared, common vision. Individuals "
            "may have conflicting vision which can be uncomfortable but with thoughtful "
            "conversation vision can evolve over time. Here we depend on our other "
            "principles: kindness in disagreement, humility to accept we may be wrong, "
            "pragmatism to accept new realities, cohesion in our execution, and reflection "
            "to adapt our views. Regardless of these disagreements, as members of an "
            "organization we must choose to stand behind the greater common goal.</p>"
        ),
    ),
    Principle(
        name="Execution",
        simple=(
            "The execution of an idea matters much more than the idea itself. This means "
            "that the best idea poorly executed is no better than a mediocre idea well "
            "executed. Action should always be preferred to inaction and uncertainty around "
            "the best idea must not prevent execution. Organizationally we should strive "
            "towards single decision makers who promote group discussion and buy in but act "
            "without requiring consensus."
        ),
        extended=(
            "<p>The best execution must be both effective and efficient, which we can think "
            "of direction and velocity. Effective execution depends on going the right "
            "direction, meaning there is an alignment with vision and strategic goals with "
            "the highest priority work being done first. Without effective execution, work "
            "may get done without advancing towards the end goal.</p>"
            "<p>Efficient execution measures our velocity and using minimal resources "
            "through leverage. It is important to take a long term view when measuring "
            "velocity, as it allows costs to be amortized. Automating or eliminating tasks "
            "may reduce short term efficiency but increase long run productivity. Doing a "
            "task well once pays dividends to doing it many times. Measure twice, cut "
            "once.</p>"
        ),
    ),
    Principle(
        name="Communication",
        simple=(
            "For the organization to execute well, it is necessary that all levels of "
            "individuals execute well. However, an individual cannot efficiently execute "
            "autonomously without the context of the broader strategic goals. This demands "
            "a cohesion at every level of the company through frequent and detailed "
            "communication of goals and strategy. The goal of this communication is to "
            "ensure a shared understanding, while being as concise as possible without "
            "being terse."
        ),
        extended=(
            "<p>Communication should extend from top-down to provide the strategic context "
            "necessary and bottom-up to provide feedback. This enables every individual to "
            "prioritize their work and execute efficiently while feedback allows strategy "
            "to adapt to changing conditions.</p>"
        ),
    ),
    Principle(
        name="Beauty Works Better",
        simple=(
            "Beauty can exist in any job well done. A job well done requires applying a "
            "sense of purpose and thoughtfulness, a consideration for the consumer of our "
            "work. In this way, we must treat our work as a craft to be practiced and "
            "perfected. This attention to detail should be applied to everything we produce "
            "internally and externally."
        ),
        extended=(
            "<p>Beyond natural beauty, making something beautiful is an active choice. It is "
            "a choice between thorough attention to detail and a consideration of our "
            "peers, users, partners and customers, or a cursory effort which is ultimately "
            "inefficient in its execution. Making something beautiful requires more short "
            "term effort, but increases the longevity and long term efficiency.</p>"
            "<p>Beauty also takes shape in many forms: in the wording of a document, the "
            "implementation of a technical feature, the syntax of a configuration file, and "
            "much, much more. We should strive for beauty in all forms of our work, and in "
            "doing so we should understand that other members of our community may be more "
            "skillful at producing a certain kind of beauty. There is no shame in not "
            "achieving a perfect skill in all categories. Instead, we should complement the "
            "strengths of each other and reach out to others for help. Together, we can "
            "create truly beautiful work.</p>"
        ),
    ),
    Principle(
        name="Reflection",
        simple=(
            "Reflection requires thoughtful and objective consideration and is a recurring "
            "theme across our principles. At its simplest, we must ask ourselves what could "
            "be done differently, allowing us to learn from our successes and our mistakes. "
            "We must be humble and use hindsight to recognize our mistakes so that we can "
            "learn, pragmatic in accepting new realities even if we must admit to a mistake, "
            "and reflective to adapt our goals and strategies."
        ),
        extended=(
            "<p>This reflection is not limited to individuals, and can be applied to the "
            "organizational structure and processes as well. When process is implemented, "
            "it is to make repeated interactions more efficient and to provide leverage. "
            "When the status quo prevents progress we must reflect on how it can be adapted "
            "to better serve its participants.</p>"
            "<p>Reflection provides independent thinking and a healthy level of skepticism "
            "with an ability to question our understanding, execution, and adherence to our "
            "principles.</p>"
        ),
    ),
)

DEFAULT_CORPUS = Corpus(PRINCIPLES)


__all__ = ["Principle", "Corpus", "PRINCIPLES", "DEFAULT_CORPUS", "normalize_name"]
