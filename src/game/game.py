# src/game/game.py
import sys, argparse, logging
from typing import Optional
import pygame
from pygame import K_SPACE, K_ESCAPE, K_w, K_x, K_a, K_d
from .config import (
    WIDTH, HEIGHT, MIN_WIDTH, MIN_HEIGHT, FPS, SEED_DEFAULT,
    COLOR_SKY, COLOR_PLAYER, COLOR_GLIDE, COLOR_FG, COLOR_DANGER, COLOR_HUD
)
from .world import World, GamePhase

JUMP_KEYS = (K_w, K_SPACE)
MOVE_KEYS = {K_a: -1, K_d: +1}


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Level seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--width", type=int, default=WIDTH)
    p.add_argument("--height", type=int, default=HEIGHT)
    p.add_argument("--log-level", default="WARNING")
    return p.parse_args()


def draw_scene(screen: pygame.Surface, world: World, font: pygame.font.Font,
               hud: Optional[str] = None, big_font: Optional[pygame.font.Font] = None):
    """Draw the world as seen by the camera, the HUD and the game-over overlay."""
    screen.fill(COLOR_SKY)
    cam = world.camera_x
    world.level.draw(screen, cam)

    player = world.player
    pr = player.rect.move(-int(cam), 0)
    pygame.draw.rect(screen, COLOR_PLAYER, pr)

    if player.glide_active:
        w, h = int(player.size * 1.8), int(player.size / 1.5)
        wing = pygame.Surface((w, h), pygame.SRCALPHA)
        pygame.draw.ellipse(wing, COLOR_GLIDE, wing.get_rect())
        screen.blit(wing, (pr.centerx - w // 2, pr.top - 15 - h // 2))

    if hud is None:
        hud = f"Score: {world.score}"
    screen.blit(font.render(hud, True, COLOR_HUD), (12, 10))

    if world.phase is GamePhase.GAME_OVER:
        cx, cy = screen.get_width() // 2, screen.get_height() // 2
        big = big_font if big_font is not None else font
        lines = [
            (big.render("GAME OVER", True, COLOR_DANGER), cy - 40),
            (font.render(f"Final Score: {world.score}", True, COLOR_FG), cy + 20),
            (font.render("Press SPACE to restart", True, COLOR_FG), cy + 60),
        ]
        for txt, y in lines:
            screen.blit(txt, (cx - txt.get_width() // 2, y - txt.get_height() // 2))


def handle_event(world: World, event) -> bool:
    """Map one pygame event onto the world. Returns False when the game should quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.VIDEORESIZE:
        world.resize(max(event.w, MIN_WIDTH), max(event.h, MIN_HEIGHT))
    elif event.type == pygame.KEYDOWN:
        if event.key == K_ESCAPE:
            return False
        if world.phase is GamePhase.PLAYING:
            if event.key in JUMP_KEYS:
                world.jump()
            if event.key == K_x:
                world.set_gliding(True)
            if event.key in MOVE_KEYS:
                world.move(MOVE_KEYS[event.key])
        elif event.key == K_SPACE:
            world.restart()
    elif event.type == pygame.KEYUP:
        if event.key in MOVE_KEYS:
            world.stop()
        if event.key == K_x:
            world.set_gliding(False)
    return True


def run():
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # signals LevelGen to randomize
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("Glide Runner")
    screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 24)
    big_font = pygame.font.SysFont(None, 64)

    world = World(launch_seed, args.width, args.height)

    # score text only changes on pickups (and resets)
    hud = {"text": f"Score: {world.score}"}
    world.score_listeners.append(lambda score: hud.update(text=f"Score: {score}"))

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if not handle_event(world, event):
                pygame.quit(); sys.exit()
            if event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((world.width, world.height), pygame.RESIZABLE)

        world.step()

        draw_scene(screen, world, font, hud["text"], big_font)
        pygame.display.flip()

if __name__ == "__main__":
    run()
