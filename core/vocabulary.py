"""Static Australian slang catalog."""

from .models import Category, Difficulty, VocabularyCard

B = Difficulty.BEGINNER
M = Difficulty.INTERMEDIATE
A = Difficulty.ADVANCED

# Slang terms by category: id -> (term, meaning, example, difficulty)
SLANG_TERMS = {
    Category.GREETINGS: {
        'name': 'Greetings',
        'items': {
            'gday': ("g'day", 'hello', "G'day mate, how ya going?", B),
            'how-ya-going': ('how ya going', 'how are you', 'How ya going? Haven\'t seen you in ages.', B),
            'hooroo': ('hooroo', 'goodbye', 'Hooroo, see you next week!', M),
            'catch-ya-later': ('catch ya later', 'see you later', 'Gotta run, catch ya later.', B),
        }
    },
    Category.FOOD: {
        'name': 'Food & Drink',
        'items': {
            'arvo': ('arvo', 'afternoon', "Let's grab a coffee this arvo.", B),
            'brekkie': ('brekkie', 'breakfast', 'What are we having for brekkie?', B),
            'snag': ('snag', 'sausage', 'Throw another snag on the barbie.', M),
            'barbie': ('barbie', 'barbecue', "We're having a barbie on Sunday.", B),
            'cuppa': ('cuppa', 'cup of tea or coffee', 'Sit down and have a cuppa.', B),
            'stubby': ('stubby', 'small bottle of beer', 'Grab us a stubby from the esky.', M),
        }
    },
    Category.PEOPLE: {
        'name': 'People',
        'items': {
            'mate': ('mate', 'friend', "He's been my mate since school.", B),
            'bloke': ('bloke', 'man', 'Nice bloke, works down at the servo.', B),
            'sheila': ('sheila', 'woman (dated)', 'My nan still calls women sheilas.', A),
            'drongo': ('drongo', 'idiot', "Don't be a drongo, shut the gate.", M),
            'larrikin': ('larrikin', 'mischievous joker', "He's a bit of a larrikin at parties.", A),
        }
    },
    Category.PLACES: {
        'name': 'Places',
        'items': {
            'servo': ('servo', 'service station', "I'll fill up at the servo on the way.", B),
            'bottle-o': ('bottle-o', 'liquor store', 'Pop into the bottle-o on your way over.', M),
            'woop-woop': ('woop woop', 'the middle of nowhere', 'They live out in woop woop.', A),
            'the-bush': ('the bush', 'the countryside', 'We went camping out in the bush.', M),
        }
    },
    Category.EXPRESSIONS: {
        'name': 'Expressions',
        'items': {
            'no-worries': ('no worries', "it's fine / you're welcome", 'Thanks for the lift! No worries.', B),
            'fair-dinkum': ('fair dinkum', 'genuine, true', 'Is that fair dinkum or are you having a laugh?', M),
            'stoked': ('stoked', 'very happy', "I'm stoked you could make it.", B),
            'reckon': ('reckon', 'think, suppose', 'I reckon it will rain later.', B),
            'heaps': ('heaps', 'a lot', 'Thanks heaps for your help.', B),
            'chuck-a-sickie': ('chuck a sickie', 'take a day off pretending to be sick', 'He chucked a sickie to watch the cricket.', A),
            'flat-out': ('flat out like a lizard drinking', 'extremely busy', "I've been flat out like a lizard drinking all week.", A),
        }
    },
    Category.WORKPLACE: {
        'name': 'Workplace',
        'items': {
            'smoko': ('smoko', 'short work break', "Let's have smoko at ten.", M),
            'yakka': ('hard yakka', 'hard work', 'Building that fence was hard yakka.', M),
            'tradie': ('tradie', 'tradesperson', 'The tradie is coming to fix the sink.', B),
            'knock-off': ('knock off', 'finish work', 'What time do you knock off today?', M),
        }
    }
}

CATEGORY_DISPLAY_NAMES = {cat.value: data['name'] for cat, data in SLANG_TERMS.items()}

DIFFICULTY_DISPLAY_NAMES = {
    Difficulty.BEGINNER.value: 'Beginner',
    Difficulty.INTERMEDIATE.value: 'Intermediate',
    Difficulty.ADVANCED.value: 'Advanced',
}

# Display label for each mastery level
LEVEL_LABELS = ['New', 'Learning', 'Familiar', 'Good', 'Strong', 'Mastered']


def build_catalog() -> tuple[VocabularyCard, ...]:
    """Flatten SLANG_TERMS into cards, in category then item order."""
    cards = []
    for category, data in SLANG_TERMS.items():
        for card_id, (term, meaning, example, difficulty) in data['items'].items():
            cards.append(VocabularyCard(
                id=card_id,
                term=term,
                meaning=meaning,
                example=example,
                category=category,
                difficulty=difficulty
            ))
    return tuple(cards)


CATALOG = build_catalog()
CARDS_BY_ID = {card.id: card for card in CATALOG}


def get_card(card_id: str) -> VocabularyCard | None:
    return CARDS_BY_ID.get(card_id)
