import pytest

from conftest import make_item
from flagstack_app.core.error_handlers import DataIntegrityError, GenerationError
from flagstack_app.models import FlagType, PracticeMode
from flagstack_app.modules.practice.engine.distractor_engine import DistractorEngine
from flagstack_app.modules.practice.logics.similarity import rank_by_similarity
from flagstack_app.modules.practice.schemas import Option


@pytest.fixture
def items():
    return [
        make_item(1, 'alpha', name='Alpha', colors=['white', 'blue'], pattern='swallowtail'),
        make_item(2, 'bravo', name='Bravo', colors=['red'], pattern='swallowtail'),
        make_item(3, 'charlie', name='Charlie', colors=['blue', 'white', 'red'], pattern='stripes'),
        make_item(4, 'delta', name='Delta', colors=['yellow', 'blue'], pattern='stripes'),
        make_item(5, 'echo', name='Echo', colors=['blue', 'red'], pattern='halves'),
        make_item(6, 'foxtrot', name='Foxtrot', colors=['white', 'red'], pattern='diamond'),
        make_item(7, 'pennant-one', name='Pennant One', colors=['white', 'red'], pattern='disc',
                  type=FlagType.PENNANT_NUMBER, category='numbers'),
        make_item(8, 'pennant-two', name='Pennant Two', colors=['blue', 'white'], pattern='disc',
                  type=FlagType.PENNANT_NUMBER, category='numbers'),
    ]


@pytest.mark.parametrize('mode', list(PracticeMode))
@pytest.mark.parametrize('position', [0, 1, 2, 3])
def test_options_are_well_formed_for_every_target(items, mode, position):
    for target in items:
        options, correct_answer = DistractorEngine.generate_options(target, items, position, mode)

        assert len(options) == 4
        assert [o.id for o in options] == ['opt_0', 'opt_1', 'opt_2', 'opt_3']
        assert len({o.value for o in options}) == 4
        assert correct_answer == f'opt_{position}'
        assert options[position].value == target.key


def test_learn_mode_options_use_names(items):
    options, _ = DistractorEngine.generate_options(items[0], items, 2, PracticeMode.LEARN)
    names = {item.key: item.name for item in items}
    for option in options:
        assert option.label == names[option.value]
        assert option.image_path is None


def test_match_mode_options_use_images(items):
    options, _ = DistractorEngine.generate_options(items[0], items, 1, PracticeMode.MATCH)
    images = {item.key: item.image_path for item in items}
    for option in options:
        assert option.label == ''
        assert option.image_path == images[option.value]


@pytest.mark.parametrize('mode', list(PracticeMode))
def test_distractors_follow_similarity_ranking(items, mode):
    target = items[3]
    expected = [flag.key for flag, _ in rank_by_similarity(target, items, mode)[:3]]

    options, correct_answer = DistractorEngine.generate_options(target, items, 1, mode)
    distractor_values = [o.value for o in options if o.id != correct_answer]

    assert distractor_values == expected


def test_exactly_four_flags_uses_the_other_three(items):
    four = items[:4]
    for position, target in enumerate(four):
        question = DistractorEngine.build_question(target, four, position, PracticeMode.LEARN)
        others = {f.key for f in four if f.key != target.key}
        distractors = {o.value for o in question.options if o.id != question.correct_answer}
        assert distractors == others
        assert question.flag_id == target.id
        assert question.user_answer is None


def test_fewer_than_four_flags_is_a_data_error(items):
    with pytest.raises(DataIntegrityError):
        DistractorEngine.generate_options(items[0], items[:3], 0, PracticeMode.LEARN)


@pytest.mark.parametrize('position', [-1, 4])
def test_position_out_of_range(items, position):
    with pytest.raises(GenerationError):
        DistractorEngine.generate_options(items[0], items, position, PracticeMode.MATCH)


def test_validate_rejects_duplicate_values():
    options = [
        Option('opt_0', 'Alpha', 'alpha'),
        Option('opt_1', 'Alpha', 'alpha'),
        Option('opt_2', 'Bravo', 'bravo'),
        Option('opt_3', 'Delta', 'delta'),
    ]
    with pytest.raises(GenerationError):
        DistractorEngine.validate_options(options, 'opt_0', 'alpha')


def test_validate_rejects_unknown_correct_answer():
    options = [Option(f'opt_{i}', f'Name {i}', f'key-{i}') for i in range(4)]
    with pytest.raises(GenerationError):
        DistractorEngine.validate_options(options, 'opt_9')


def test_validate_accepts_image_only_options():
    options = [Option(f'opt_{i}', '', f'key-{i}', image_path=f'/img/{i}.svg') for i in range(4)]
    DistractorEngine.validate_options(options, 'opt_3')


def test_validate_rejects_option_without_label_or_image():
    options = [Option(f'opt_{i}', '', f'key-{i}') for i in range(4)]
    with pytest.raises(GenerationError):
        DistractorEngine.validate_options(options, 'opt_0')
