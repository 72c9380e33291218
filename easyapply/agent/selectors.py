"""Selectors for LinkedIn job pages and the Easy Apply dialog."""


class LinkedInSelectors:
    """Selector constants grouped by the part of the page they target."""

    # Dialog
    MODAL_CONTAINERS = ["[data-test-modal]", "div.jobs-easy-apply-modal"]
    MODAL = "div.jobs-easy-apply-modal"
    MODAL_FOOTER = "div.jobs-easy-apply-modal footer, footer.jobs-easy-apply-modal__footer"
    SPINNER = ".artdeco-spinner"
    DISMISS_BUTTON = 'button[aria-label*="Dismiss"]'
    DIALOG_PRIMARY_BUTTON = "button[data-test-dialog-primary-btn]"

    # "Save this application?" interstitial raised when leaving mid-flow
    SAVE_DIALOG = '[role="alertdialog"]:has-text("Save this application")'
    SAVE_BUTTON = (
        'button[data-control-name="save_application_btn"], '
        '[role="alertdialog"] button[data-test-dialog-primary-btn]'
    )

    # State classification
    SUBMIT_STATE_BUTTON = 'button[aria-label*="Submit application"]'
    REVIEW_STATE_BUTTON = 'button[aria-label*="Review"]'
    NEXT_STATE_BUTTON = 'button[aria-label*="Continue to next step"]'
    INLINE_ERROR = ".artdeco-inline-feedback--error"

    # Primary action, most specific first
    PRIMARY_BUTTONS = [
        "button[data-live-test-easy-apply-next-button]",
        "button[data-live-test-easy-apply-review-button]",
        "button[data-live-test-easy-apply-submit-button]",
        "button[data-easy-apply-next-button]",
        'button[aria-label="Continue to next step"]',
        'button[aria-label="Review your application"]',
        'button[aria-label="Submit application"]',
        ".artdeco-button--primary",
    ]

    # Validation; ERROR_SELECTORS scopes to one section, VALIDATION_ERRORS to the dialog
    VALIDATION_ERRORS = [
        ".artdeco-inline-feedback--error",
        "[data-test-form-element-error-message]",
        ".fb-form-element__error-text",
    ]
    ERROR_SELECTORS = [
        "[data-test-form-element-error-message]",
        ".artdeco-inline-feedback--error",
        ".fb-form-element__error-text",
        '[role="alert"]',
    ]

    # Follow company
    FOLLOW_LABEL = "label[for='follow-company-checkbox']"
    FOLLOW_CHECKBOX = "#follow-company-checkbox"

    # Job page
    EASY_APPLY_BUTTONS = [
        '[data-view-name="job-apply-button"]',
        "button.jobs-apply-button",
        'a[aria-label*="Easy Apply"]',
        'a[aria-label*="Candidature simplifiée"]',
        'button[aria-label*="Postuler"]',
        'a[aria-label*="Candidatar"]',
        'button[aria-label*="Bewerben"]',
        'button[data-control-name="jobdetails_topcard_inapply"]',
        ".jobs-s-apply button",
    ]
    ALREADY_APPLIED = [
        ".jobs-details-top-card__apply-status--applied",
        'span:has-text("Applied")',
        'span:has-text("Application sent")',
        'span:has-text("Candidature envoyée")',
        'span:has-text("Candidatura enviada")',
        'span:has-text("Bewerbung gesendet")',
        '.artdeco-inline-feedback--success:has-text("Applied")',
    ]
    SHOW_MORE = "button.inline-show-more-text__button, button.jobs-description__footer-button"
    JOB_DESCRIPTION = [
        'span[data-testid="expandable-text-box"]',
        "#job-details",
        "article.jobs-description__container .jobs-box__html-content",
        "div.jobs-description-content__text--stretch",
        "div.jobs-description",
    ]

    # Form structure
    FORM = "form"
    FORM_SECTIONS = [
        ".jobs-easy-apply-form-section__grouping",
        ".fb-dash-form-element",
        "[data-test-form-element]",
        ".jobs-document-upload",
        ".jobs-resume-picker",
        "[data-test-document-upload]",
    ]
    UPLOAD_BLOCK_XPATH = (
        "xpath=./ancestor::div[contains(@class,'jobs-document-upload') "
        "or contains(@class,'jobs-resume-picker')]"
    )

    # Question text
    RADIO_TITLE = "[data-test-form-builder-radio-button-form-component__title]"
    CHECKBOX_TITLE = "[data-test-checkbox-form-title]"
    TEXT_ENTITY_TITLE = "[data-test-text-entity-list-form-title]"

    # Inputs
    FILE_INPUT = 'input[type="file"]'
    RADIO = 'input[type="radio"]'
    CHECKBOX = 'input[type="checkbox"]'
    SELECT = "select"
    TEXTAREA = "textarea"
    TEXT_INPUT = "input"
    DATE_INPUT = 'input[type="date"]'
    TYPEAHEAD_INPUTS = [
        "[data-test-single-typeahead-input]",
        '[role="combobox"]',
        'input[autocomplete="off"][aria-autocomplete="list"]',
    ]
    TYPEAHEAD_OPTION = '[role="option"]'

    # Documents
    UPLOADED_FILE_NAME = ".jobs-document-upload__filename"
    UPLOAD_SUCCESS = "[data-test-document-upload-success]"
    UPLOADED_FILE_CARD_NAME = ".jobs-document-upload-redesign-card__file-name"
    PREVIOUS_UPLOAD_CARD = "[data-test-document-upload-file-card]"
    PREVIOUS_RESUME_RADIO = 'input[type="radio"][data-test-resume-radio]'
    UPLOAD_CONTROL = 'button:has-text("Upload"), label:has-text("Upload")'
    UPLOAD_WORDING = "text=/upload|attach|document/i"
    DOCUMENT_UPLOAD = "[data-test-document-upload]"
