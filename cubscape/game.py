"""The game: menu, input handling, frame updates and the window loop."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from cubscape.errors import SceneError
from cubscape.framebuffer import FrameBuffer
from cubscape.player import Control, Player
from cubscape.render import Textures, render_frame
from cubscape.scene import Scene, load_scene
from cubscape.xpm import XpmError, XpmImage, load_xpm

WIN_WIDTH = 1024
WIN_HEIGHT = 768
WINDOW_TITLE = "cub3D"
MENU_IMAGE = "./assets/ui/main_menu.xpm"
BONUS_FLAG = "--bonus"


class Game:
    """Game state shared by the input handlers and the frame loop."""

    def __init__(
        self,
        scene: Scene,
        textures: Textures,
        width: int = WIN_WIDTH,
        height: int = WIN_HEIGHT,
        minimap: bool = False,
        mouse_look: bool = False,
    ) -> None:
        self.scene = scene
        self.textures = textures
        self.width = width
        self.height = height
        self.minimap = minimap
        self.mouse_look = mouse_look
        self.mid_x = width // 2
        self.mid_y = height // 2
        self.started = False
        start = scene.player
        self.player = Player.from_start(start.x, start.y, start.angle)
        self.framebuffer = FrameBuffer(width, height)

    def start(self) -> bool:
        """Leave the menu; return True if the game was not running yet."""
        if self.started:
            return False
        print("Start game")
        self.started = True
        return True

    def key_press(self, control: Control) -> None:
        """Hold a movement control; ignored while the menu is shown."""
        if self.started:
            self.player.press(control)

    def key_release(self, control: Control) -> None:
        """Let go of a movement control."""
        self.player.release(control)

    def mouse_click(self, button: int, x: int, y: int) -> bool:
        """Start the game on a left click inside the window from the menu."""
        if (
            button == 1
            and not self.started
            and 0 < x < self.width
            and 0 < y < self.height
        ):
            return self.start()
        return False

    def mouse_move(self, x: int, y: int) -> bool:
        """Turn by the pointer's offset from the centre.

        Returns True when the player turned and the pointer should be
        moved back to the centre.
        """
        delta_x = x - self.mid_x
        if delta_x == 0:
            return False
        self.player.rotate(delta_x * self.player.sensitivity)
        return True

    def update(self, now: float | None = None) -> bool:
        """Apply held controls and render a frame; False while in the menu."""
        if not self.started:
            return False
        self.player.apply_controls(self.scene.grid)
        self.player.update_frame_time(now)
        render_frame(
            self.framebuffer, self.player, self.scene, self.textures, self.minimap
        )
        return True


def _rgba(fb: FrameBuffer) -> bytes:
    data = bytearray(fb.to_bytes())
    data[0::4], data[2::4] = data[2::4], data[0::4]
    data[3::4] = b"\xff" * (len(data) // 4)
    return bytes(data)


def _image_buffer(image: XpmImage) -> FrameBuffer:
    fb = FrameBuffer(image.width, image.height)
    for y in range(image.height):
        for x in range(image.width):
            fb.put_pixel(x, y, image.pixel(x, y))
    return fb


def _surface(pygame, fb: FrameBuffer):
    return pygame.image.frombuffer(_rgba(fb), (fb.width, fb.height), "RGBA")


def _run_window(game: Game) -> int:
    import pygame

    keys = {
        pygame.K_w: Control.FORWARD,
        pygame.K_s: Control.BACKWARD,
        pygame.K_a: Control.LEFT,
        pygame.K_d: Control.RIGHT,
        pygame.K_LEFT: Control.TURN_LEFT,
        pygame.K_RIGHT: Control.TURN_RIGHT,
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((game.width, game.height))
        pygame.display.set_caption(WINDOW_TITLE)
        if game.mouse_look:
            pygame.mouse.set_pos(game.mid_x, game.mid_y)
        try:
            menu = _image_buffer(load_xpm(MENU_IMAGE))
        except XpmError:
            menu = None
        if menu is not None and not game.started:
            screen.blit(_surface(pygame, menu), (0, 0))
        pygame.display.flip()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 0
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        return 0
                    if event.key == pygame.K_SPACE and not game.started:
                        game.start()
                        screen.fill((0, 0, 0))
                    elif event.key in keys:
                        game.key_press(keys[event.key])
                elif event.type == pygame.KEYUP and event.key in keys:
                    game.key_release(keys[event.key])
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if game.mouse_click(event.button, *event.pos):
                        screen.fill((0, 0, 0))
                elif event.type == pygame.MOUSEMOTION and game.mouse_look:
                    if game.mouse_move(*event.pos):
                        pygame.mouse.set_pos(game.mid_x, game.mid_y)
            if game.update():
                screen.blit(_surface(pygame, game.framebuffer), (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the scene file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    bonus = BONUS_FLAG in args
    args = [arg for arg in args if arg != BONUS_FLAG]
    if len(args) != 1:
        print("Error: Invalid number of arguments")
        return 1
    try:
        scene = load_scene(args[0])
        textures = Textures.load(scene)
    except SceneError as exc:
        print(f"Error: {exc}")
        return 1
    game = Game(scene, textures, minimap=bonus, mouse_look=bonus)
    return _run_window(game)


if __name__ == "__main__":
    sys.exit(main())