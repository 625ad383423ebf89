from ares.services.shift_detector import ShiftDetector


def test_explicit_shift():
    signal = ShiftDetector().detect("OK, let's talk about my sleep now")
    assert signal.type == "explicit"
    assert signal.confidence == 0.9
    assert signal.detected_phrase == "let's talk about"

def test_explicit_checked_before_implicit():
    signal = ShiftDetector().detect("By the way, can we talk about supplements")
    assert signal.type == "explicit"

def test_implicit_shift():
    signal = ShiftDetector().detect("Oh, by the way, I started creatine")
    assert signal.type == "implicit"
    assert signal.confidence == 0.7

def test_tangent():
    signal = ShiftDetector().detect("random question, is coffee ok before bed")
    assert signal.type == "tangent"
    assert signal.confidence == 0.5

def test_interrogative_opener_short():
    signal = ShiftDetector().detect("Should I eat before training?")
    assert signal.type == "question"
    assert signal.confidence == 0.4
    assert signal.detected_phrase == "should"

def test_long_question_is_not_a_signal():
    text = "How " + "very " * 30 + "long can a question get?"
    assert len(text) >= 100
    assert ShiftDetector().detect(text) is None

def test_no_signal():
    assert ShiftDetector().detect("I ate eggs for breakfast") is None
    assert ShiftDetector().detect("") is None
