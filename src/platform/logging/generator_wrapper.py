from typing import TYPE_CHECKING, Any, Callable, Generator, Self

from src.platform.logging.loguru_io_config import GeneratorMethod
from src.platform.logging.loguru_io_utils import reset_call_depth


if TYPE_CHECKING:
    from src.platform.logging.loguru_io import LoguruIO


class GeneratorWrapper:
    """Forward iteration to a decorated generator, logging every yielded value"""

    def __init__(self, gen_obj: Generator[Any, Any, Any], custom_logger: 'LoguruIO') -> None:
        self.gen_obj = gen_obj
        self._custom_logger: LoguruIO = custom_logger

    def __iter__(self) -> Self:
        return self

    def _forward(self, method: GeneratorMethod, step: Callable[[], Any], sent: Any) -> Any:
        try:
            self._custom_logger.log_args_kwargs_content(sent, yield_method=method)
            out = step()
            self._custom_logger.log_return_content(out, yield_method=method)
            return out
        except StopIteration as e:
            self._custom_logger.log_return_content(e.value, yield_method=method)
            raise
        finally:
            reset_call_depth()

    def __next__(self) -> Any:
        return self._forward(GeneratorMethod.NEXT, lambda: next(self.gen_obj), None)

    def send(self, value: Any) -> Any:
        return self._forward(GeneratorMethod.SEND, lambda: self.gen_obj.send(value), value)

    def throw(self, exc: BaseException) -> Any:
        return self._forward(GeneratorMethod.THROW, lambda: self.gen_obj.throw(exc), exc)

    def close(self) -> None:
        self.gen_obj.close()
