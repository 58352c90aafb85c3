from idproxy.domain.manager.model import Role


class TestRole:
    def test_values(self) -> None:
        assert [int(r) for r in Role] == [0, 1, 2]
        assert Role(0) is Role.NONE
