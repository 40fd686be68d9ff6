import random

from block_smash.game.bag import PieceBag, shuffle
from block_smash.game.shapes import PieceType, all_piece_types, lookup


def test_shuffle_is_a_permutation_in_place():
    items = list(range(20))
    out = shuffle(items, random.Random(1))
    assert out is items
    assert sorted(out) == list(range(20))


def test_shuffle_is_reproducible_with_seeded_rng():
    a = shuffle(list("abcdefg"), random.Random(42))
    b = shuffle(list("abcdefg"), random.Random(42))
    assert a == b


def test_shuffle_handles_short_sequences():
    assert shuffle([], random.Random(0)) == []
    assert shuffle(["x"], random.Random(0)) == ["x"]


def test_initial_bag_holds_each_type_once():
    bag = PieceBag(random.Random(3))
    assert sorted(bag.pieces) == sorted(all_piece_types())
    assert bag.cursor == 0


def test_refill_keeps_last_two_and_appends_a_full_set():
    bag = PieceBag(random.Random(5))
    original = list(bag.pieces)
    taken = [bag.take() for _ in range(5)]
    assert taken == original[:5]
    assert bag.cursor == len(bag) - 2

    sixth = bag.take()
    assert sixth == original[5]
    assert len(bag) == 9
    assert bag.pieces[:2] == original[-2:]
    assert sorted(bag.pieces[2:]) == sorted(all_piece_types())
    assert bag.cursor == 1


def test_every_refill_appends_one_of_each_type():
    bag = PieceBag(random.Random(11))
    refills = 0
    for _ in range(200):
        refilling = bag.cursor == len(bag) - 2
        bag.take()
        if refilling:
            refills += 1
            assert sorted(bag.pieces[2:]) == sorted(all_piece_types())
    assert refills > 20


def test_peek_matches_next_take():
    bag = PieceBag(random.Random(8))
    for _ in range(30):
        upcoming = bag.peek()
        assert bag.take() == upcoming


def test_next_piece_spawns_centred_above_the_board():
    bag = PieceBag(random.Random(2), forced=[PieceType.I, PieceType.O, PieceType.T])
    for _ in range(6):
        piece = bag.next_piece(10)
        shape = lookup(piece.kind, 1)
        assert piece.rotation == 1
        assert piece.row == -shape.rows
        assert piece.col == (10 - shape.cols) // 2
        assert piece.delay == 0


def test_forced_shapes_restrict_the_bag():
    bag = PieceBag(random.Random(0), forced=[PieceType.O])
    assert {bag.take() for _ in range(10)} == {PieceType.O}
