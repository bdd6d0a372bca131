import pytest

from flappy_sim.bird import Bird
from flappy_sim.difficulty import Difficulty, starting_difficulty
from flappy_sim.pipe import Pipe


def make_pipe(x, top_height=200, gap=150, width=60, speed=2.5):
    return Pipe(x=x, width=width, gap=gap, top_height=top_height, speed=speed)


def test_spawn_at_right_edge_with_current_difficulty(config, rng):
    pipe = Pipe.spawn(config, Difficulty(speed_multiplier=1.4, gap=130), rng)
    assert pipe.x == 400
    assert pipe.width == 60
    assert pipe.gap == 130
    assert pipe.speed == pytest.approx(3.5)
    assert not pipe.scored


def test_spawn_height_within_bounds(config, rng):
    difficulty = starting_difficulty(config)
    max_height = 600 - 150 - 100 - 50
    heights = [Pipe.spawn(config, difficulty, rng).top_height for _ in range(500)]
    assert all(50 <= h <= max_height for h in heights)
    assert max(heights) - min(heights) > 100


def test_speed_is_fixed_after_spawn(config, rng):
    pipe = Pipe.spawn(config, Difficulty(speed_multiplier=1.0, gap=150), rng)
    pipe.update(2.0)
    assert pipe.x == pytest.approx(395.0)
    pipe.update(1.0)
    assert pipe.x == pytest.approx(392.5)


def test_score_latches_once_when_right_edge_passes_bird(config):
    bird = Bird(config)
    pipe = make_pipe(x=20)
    # right edge exactly at the bird is not yet past it
    assert not pipe.try_score(bird)
    pipe.update(1.0)
    assert pipe.try_score(bird)
    assert pipe.scored
    pipe.update(1.0)
    assert not pipe.try_score(bird)
    assert pipe.scored


def test_bird_inside_gap_does_not_collide(config):
    bird = Bird(config)
    pipe = make_pipe(x=70)
    bird.y = 200  # hitbox 205..219
    assert not pipe.collides_with(bird)
    bird.y = 331  # hitbox bottom exactly at the lower column
    assert not pipe.collides_with(bird)


def test_bird_breaching_top_column_collides(config):
    bird = Bird(config)
    pipe = make_pipe(x=70)
    bird.y = 194
    assert pipe.collides_with(bird)


def test_bird_breaching_bottom_column_collides(config):
    bird = Bird(config)
    pipe = make_pipe(x=70)
    bird.y = 332
    assert pipe.collides_with(bird)


@pytest.mark.parametrize("x", [25, 109, 300, -100])
def test_no_collision_outside_horizontal_band(config, x):
    bird = Bird(config)
    bird.y = 0
    assert not make_pipe(x=x).collides_with(bird)


def test_padding_forgives_corner_overlap(config):
    bird = Bird(config)
    # pipe starts 3px inside the bird's sprite but outside its padded box
    pipe = make_pipe(x=bird.x + bird.width - 3, top_height=400)
    assert not pipe.collides_with(bird)


def test_off_screen_only_when_fully_past_left_edge():
    assert make_pipe(x=-61).off_screen()
    assert not make_pipe(x=-60).off_screen()
    assert not make_pipe(x=-1).off_screen()
