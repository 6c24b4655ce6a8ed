import pytest

from conftest import make_item
from flagstack_app.models import FlagType, PracticeMode
from flagstack_app.modules.practice.logics.similarity import (
    color_similarity,
    name_similarity,
    pattern_similarity,
    rank_by_similarity,
    semantic_similarity,
    type_similarity,
    visual_similarity,
)


def test_color_similarity_is_case_insensitive_jaccard():
    a = make_item(1, 'a', colors=['White', 'blue'])
    b = make_item(2, 'b', colors=['Blue', 'red'])
    assert color_similarity(a, b) == pytest.approx(1 / 3)


def test_color_similarity_empty_sets():
    empty_a = make_item(1, 'a')
    empty_b = make_item(2, 'b')
    red = make_item(3, 'c', colors=['red'])
    assert color_similarity(empty_a, empty_b) == 1.0
    assert color_similarity(empty_a, red) == 0.0


@pytest.mark.parametrize('pattern_a, pattern_b, expected', [
    (None, None, 0.5),
    ('cross', None, 0.0),
    (None, 'cross', 0.0),
    ('Cross', 'cross', 1.0),
    ('cross', 'saltire', 0.3),
])
def test_pattern_similarity(pattern_a, pattern_b, expected):
    a = make_item(1, 'a', pattern=pattern_a)
    b = make_item(2, 'b', pattern=pattern_b)
    assert pattern_similarity(a, b) == expected


def test_type_similarity():
    letter = make_item(1, 'a', type=FlagType.FLAG_LETTER, category='letters')
    letter_2 = make_item(2, 'b', type=FlagType.FLAG_LETTER, category='letters')
    same_category = make_item(3, 'c', type=FlagType.SPECIAL_PENNANT, category='letters')
    unrelated = make_item(4, 'd', type=FlagType.SUBSTITUTE, category='substitutes')

    assert type_similarity(letter, letter_2) == 1.0
    assert type_similarity(letter, same_category) == 0.5
    assert type_similarity(letter, unrelated) == 0.0


@pytest.mark.parametrize('name_a, name_b, expected', [
    ('Bravo', 'Bravo', 1.0),
    ('Delta', 'Echo', 0.15),
    ('Hotel', 'Hat', 0.55),
    ('Pennant One', 'Pennant Two', 1.0),
])
def test_name_similarity(name_a, name_b, expected):
    a = make_item(1, 'a', name=name_a)
    b = make_item(2, 'b', name=name_b)
    assert name_similarity(a, b) == pytest.approx(expected)


def test_self_comparison_scores_zero():
    flag = make_item(1, 'alpha', colors=['white', 'blue'], pattern='cross')
    assert visual_similarity(flag, flag) == 0
    assert semantic_similarity(flag, flag) == 0


def test_visual_similarity_weights():
    a = make_item(1, 'a', colors=['white', 'blue'], pattern='cross')
    twin = make_item(2, 'b', colors=['blue', 'white'], pattern='cross')
    assert visual_similarity(a, twin) == pytest.approx(1.0)

    red = make_item(3, 'c', colors=['red'], type=FlagType.FLAG_LETTER, category='letters')
    blue = make_item(4, 'd', colors=['blue'], type=FlagType.SUBSTITUTE, category='substitutes')
    # colors 0, patterns both missing 0.5, unrelated type 0
    assert visual_similarity(red, blue) == pytest.approx(0.15)


def test_semantic_similarity_weights():
    delta = make_item(1, 'delta', name='Delta')
    echo = make_item(2, 'echo', name='Echo')
    assert semantic_similarity(delta, echo) == pytest.approx(0.15 * 0.7 + 0.3)


def test_similarity_is_symmetric():
    a = make_item(1, 'a', name='Kilo', colors=['yellow', 'blue'], pattern='vertical-halves')
    b = make_item(2, 'b', name='Golf', colors=['yellow', 'blue'], pattern='vertical-stripes',
                  type=FlagType.PENNANT_NUMBER, category='numbers')
    assert visual_similarity(a, b) == pytest.approx(visual_similarity(b, a))
    assert semantic_similarity(a, b) == pytest.approx(semantic_similarity(b, a))


def test_rank_excludes_target_and_sorts_descending():
    target = make_item(1, 'target', colors=['white', 'blue'])
    red_1 = make_item(2, 'red-1', colors=['red'])
    twin = make_item(3, 'twin', colors=['white', 'blue'])
    red_2 = make_item(4, 'red-2', colors=['red'])

    ranked = rank_by_similarity(target, [target, red_1, twin, red_2], PracticeMode.MATCH)

    assert [flag.key for flag, _ in ranked] == ['twin', 'red-1', 'red-2']
    assert ranked[0][1] == pytest.approx(0.85)
    assert ranked[1][1] == pytest.approx(0.35)


def test_rank_uses_mode_specific_metric():
    target = make_item(1, 'delta', name='Delta', colors=['yellow', 'blue'])
    similar_name = make_item(2, 'delia', name='Delia', colors=['red'])
    similar_look = make_item(3, 'kilo', name='Kilo', colors=['yellow', 'blue'])

    learn = rank_by_similarity(target, [similar_name, similar_look], PracticeMode.LEARN)
    match = rank_by_similarity(target, [similar_name, similar_look], PracticeMode.MATCH)

    assert learn[0][0].key == 'delia'
    assert match[0][0].key == 'kilo'
