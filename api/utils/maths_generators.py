import random

from api.utils.distractors import synthesize_options
from api.utils.errors import check_request
from api.v1.schemas.question import MathQuestion

OPTION_COUNT = 4
MAX_TABLE_OPERAND = 12


def additive_bound(difficulty: int) -> int:
    return 10**difficulty


def table_bound(difficulty: int) -> int:
    return min(MAX_TABLE_OPERAND, difficulty + 2)


def _build(prompt: str, answer: int, difficulty: int, topic: str, rng) -> MathQuestion:
    return MathQuestion(
        prompt=prompt,
        answer_value=str(answer),
        options=synthesize_options(answer, OPTION_COUNT, rng),
        difficulty=difficulty,
        topic=topic,
    )


def generate_addition_question(difficulty: int, rng=None) -> MathQuestion:
    rng = rng or random
    # 1. Operands scale by powers of ten
    high = additive_bound(difficulty)
    a = rng.randint(1, high)
    b = rng.randint(1, high)

    # 2. Build question with distractors
    return _build(f"{a} + {b} = ?", a + b, difficulty, "addition", rng)


def generate_subtraction_question(difficulty: int, rng=None) -> MathQuestion:
    rng = rng or random
    high = additive_bound(difficulty)
    a = rng.randint(1, high)
    b = rng.randint(1, high)

    # Keep the result non-negative
    if a < b:
        a, b = b, a

    return _build(f"{a} - {b} = ?", a - b, difficulty, "subtraction", rng)


def generate_multiplication_question(difficulty: int, rng=None) -> MathQuestion:
    rng = rng or random
    # 1. Times-table range, capped at 12
    high = table_bound(difficulty)
    a = rng.randint(1, high)
    b = rng.randint(1, high)

    return _build(f"{a} × {b} = ?", a * b, difficulty, "multiplication", rng)


def generate_division_question(difficulty: int, rng=None) -> MathQuestion:
    rng = rng or random
    # 1. Generate divisor and quotient to ensure divisible result
    high = table_bound(difficulty)
    divisor = rng.randint(1, high)
    quotient = rng.randint(1, high)
    dividend = divisor * quotient

    return _build(f"{dividend} ÷ {divisor} = ?", quotient, difficulty, "division", rng)


# Operator name -> generator, in the order the operators are drawn
TOPIC_GENERATORS = {
    "addition": generate_addition_question,
    "subtraction": generate_subtraction_question,
    "multiplication": generate_multiplication_question,
    "division": generate_division_question,
}
OPERATOR_GENERATORS = tuple(TOPIC_GENERATORS.values())


def generate_math_questions(level: int, count: int, rng=None) -> list[MathQuestion]:
    """Generate ``count`` arithmetic questions with a random operator each."""
    check_request(level, count)
    rng = rng or random
    difficulty = max(1, level)

    questions = []
    for _ in range(count):
        generator_fn = rng.choice(OPERATOR_GENERATORS)
        questions.append(generator_fn(difficulty, rng))
    return questions
