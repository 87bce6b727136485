from .session import SessionController


def handle_key(controller: SessionController, key: str, typing: bool = False) -> bool:
    """
    Map a key press to a controller operation. Returns True when the key was
    consumed. Reset and choice keys are ignored while the user is typing.
    """
    bindings = controller.settings.key_bindings
    pos = controller.position

    if key in bindings.previous:
        if pos > 0:
            controller.go_to(pos - 1)
        return True
    if key in bindings.next:
        if pos < controller.total - 1:
            controller.go_to(pos + 1)
        return True
    if typing:
        return False
    if key in bindings.reset:
        controller.reset()
        return True
    if len(key) == 1 and "1" <= key <= "9":
        controller.select_choice(int(key) - 1)
        return True
    return False
